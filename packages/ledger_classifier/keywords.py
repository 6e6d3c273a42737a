"""Static keyword vocabularies used by the classifier.

Tables are ordered tuples of ``(keyword, target)`` pairs, wrapped in an
immutable :class:`KeywordTable`. They are built once at import and never
mutated, so concurrent classifications can share them freely.

Matching policy
---------------
- Keywords match whole words or whole phrases in the normalized text, so
  ``"gas"`` does not fire inside ``"gastei"`` and ``"game"`` does not fire
  inside ``"pagamento"``.
- When several keywords occur, the longest keyword wins; equal lengths are
  resolved by table order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache

from .models import TransactionType


@lru_cache(maxsize=1024)
def word_pattern(keyword: str) -> re.Pattern[str]:
    """Return a compiled pattern matching ``keyword`` as a whole word/phrase."""

    return re.compile(r"(?<!\w)" + re.escape(keyword) + r"(?!\w)")


def contains_word(text: str, keyword: str) -> bool:
    return word_pattern(keyword).search(text) is not None


@dataclass(frozen=True, slots=True)
class KeywordHit:
    keyword: str
    target: str


@dataclass(frozen=True, slots=True)
class KeywordTable:
    """Ordered, immutable keyword → target mapping with longest-match lookup."""

    entries: tuple[tuple[str, str], ...]
    _patterns: tuple[re.Pattern[str], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "_patterns", tuple(word_pattern(kw) for kw, _ in self.entries)
        )

    def __len__(self) -> int:
        return len(self.entries)

    def match(self, text: str) -> KeywordHit | None:
        """Return the winning keyword occurring in ``text`` or ``None``."""

        best: KeywordHit | None = None
        for (keyword, target), pattern in zip(self.entries, self._patterns, strict=True):
            if best is not None and len(keyword) <= len(best.keyword):
                continue
            if pattern.search(text):
                best = KeywordHit(keyword=keyword, target=target)
        return best

    def targets(self) -> tuple[str, ...]:
        """Distinct targets in first-seen order."""

        return tuple(dict.fromkeys(target for _, target in self.entries))


# ---------------------------------------------------------------------------
# Transaction type
# ---------------------------------------------------------------------------

CREDIT_KEYWORDS: tuple[str, ...] = (
    "recebi",
    "salário",
    "salario",
    "entrada",
    "ganhei",
    "recebido",
    "received",
    "salary",
    "income",
    "earned",
    "deposit",
)

DEBIT_KEYWORDS: tuple[str, ...] = (
    "gastei",
    "paguei",
    "comprei",
    "pago",
    "gasto",
    "compra",
    "spent",
    "paid",
    "bought",
    "purchase",
    "expense",
)

TYPE_KEYWORDS: tuple[tuple[TransactionType, tuple[str, ...]], ...] = (
    (TransactionType.CREDIT, CREDIT_KEYWORDS),
    (TransactionType.DEBIT, DEBIT_KEYWORDS),
)


def _group(target: str, *keywords: str) -> tuple[tuple[str, str], ...]:
    return tuple((kw, target) for kw in keywords)


# ---------------------------------------------------------------------------
# Keyword → category (names of the default catalog categories)
# ---------------------------------------------------------------------------

CATEGORY_KEYWORDS = KeywordTable(
    _group(
        "Food & Dining",
        "supermercado", "supermercados", "supermarket", "mercado", "mercados",
        "grocery", "groceries", "restaurante", "restaurantes", "restaurant",
        "restaurants", "café", "cafe", "cafés", "cafes", "coffee", "almoço",
        "almoco", "lunch", "jantar", "jantares", "dinner", "comida", "comidas",
        "food", "alimentação", "alimentacao", "refeição", "refeicao",
        "refeições", "refeicoes", "fast food", "delivery", "entrega",
    )
    + _group(
        "Transportation",
        "uber", "bolt", "taxi", "taxis", "táxi", "táxis", "gasolina", "gas",
        "fuel", "combustível", "combustivel", "transporte", "transportes",
        "transport", "transportation", "metro", "bus", "autocarro",
        "autocarros", "ônibus", "onibus", "estacionamento", "parking", "carro",
        "carros", "car",
    )
    + _group(
        "Salary",
        "salário", "salario", "salários", "salarios", "salary", "ordenado",
        "ordenados", "vencimento", "bónus", "bonus", "horas extra", "overtime",
        "comissão", "comissao", "comissões", "comissoes", "commission",
    )
    + _group(
        "Entertainment",
        "cinema", "cinemas", "movie", "movies", "filme", "filmes", "netflix",
        "spotify", "hbo", "disney", "streaming", "jogos", "games", "concerto",
        "concertos", "concert", "concerts", "entretenimento", "diversão",
        "diversao", "subscriptions", "subscrição", "subscricao",
    )
    + _group(
        "Shopping",
        "roupa", "roupas", "clothes", "clothing", "loja", "lojas", "store",
        "shopping", "compras", "eletrónicos", "eletronicos", "electronics",
        "presente", "presentes", "gift", "gifts",
    )
    + _group(
        "Bills & Utilities",
        "conta", "contas", "bill", "bills", "luz", "eletricidade",
        "electricity", "água", "agua", "water", "internet", "telefone",
        "telefones", "telemóvel", "telemovel", "telemóveis", "telemoveis",
        "phone", "renda", "aluguer", "rent", "hipoteca", "mortgage",
    )
    + _group(
        "Health",
        "farmácia", "farmacia", "farmácias", "farmacias", "pharmacy",
        "pharmacies", "médico", "medico", "médicos", "medicos", "doctor",
        "doctors", "hospital", "hospitais", "hospitals", "saúde", "saude",
        "health", "ginásio", "ginasio", "ginásios", "ginasios", "gym", "seguro",
        "seguros", "insurance", "medicamento", "medicamentos", "medicine",
        "medicines",
    )
    + _group(
        "Education",
        "educação", "educacao", "education", "curso", "cursos", "course",
        "courses", "livro", "livros", "book", "books", "escola", "school",
        "escolas", "schools", "universidade", "universidades", "university",
        "propina", "propinas", "tuition",
    )
    + _group(
        "Investments",
        "investimento", "investimentos", "investment", "investments",
        "dividendo", "dividendos", "dividend", "dividends", "juros", "interest",
        "ação", "acao", "ações", "acoes", "stock", "stocks",
    )
    + _group(
        "Freelance",
        "freelance", "freelancer", "consultoria", "consulting", "projeto",
        "projetos", "project", "projects",
    )
    + _group(
        "Other Expenses",
        "outros", "outras", "other", "miscellaneous", "diversos", "taxa",
        "taxas", "fees", "doação", "doacao", "doações", "doacoes", "donation",
        "donations",
    )
    + _group(
        "Other Income",
        "reembolso", "reembolsos", "refund", "refunds", "cashback",
    )
    + _group(
        "Gifts Received",
        "presente recebido", "presentes recebidos", "gift received", "prenda",
        "prendas",
    )
)


# ---------------------------------------------------------------------------
# Keyword → subcategory (names of the default catalog subcategories)
# ---------------------------------------------------------------------------

SUBCATEGORY_KEYWORDS = KeywordTable(
    # Food & Dining
    _group(
        "Groceries",
        "supermercado", "supermercados", "supermarket", "mercado", "mercados",
        "grocery", "groceries", "mercearia",
    )
    + _group(
        "Restaurants",
        "restaurante", "restaurantes", "restaurant", "restaurants", "almoço",
        "almoco", "jantar", "jantares",
    )
    + _group("Coffee", "café", "cafés", "cafe", "cafes", "coffee")
    + _group(
        "Fast Food", "fast food", "mcdonalds", "mcdonald's", "burger king", "kfc"
    )
    + _group("Delivery", "delivery", "entrega", "uber eats", "glovo", "bolt food")
    # Transportation
    + _group("Taxi/Uber", "uber", "bolt", "taxi", "taxis", "táxi", "táxis")
    + _group(
        "Fuel",
        "gasolina", "gasóleo", "gasoleo", "gas", "fuel", "combustível",
        "combustivel",
    )
    + _group(
        "Public Transport",
        "metro", "bus", "autocarro", "autocarros", "ônibus", "onibus",
        "comboio", "train", "transporte público", "transporte publico",
    )
    + _group("Parking", "estacionamento", "parking", "parque")
    + _group(
        "Car Maintenance",
        "oficina", "manutenção", "manutencao", "car maintenance",
    )
    # Salary
    + _group(
        "Monthly Salary",
        "salário", "salario", "salários", "salarios", "salary", "ordenado",
        "ordenados", "vencimento",
    )
    + _group("Bonus", "bónus", "bonus")
    + _group("Overtime", "horas extra", "overtime")
    + _group(
        "Commission", "comissão", "comissao", "comissões", "comissoes", "commission"
    )
    # Entertainment
    + _group("Movies", "cinema", "cinemas", "movie", "movies", "filme", "filmes")
    + _group(
        "Games",
        "jogos", "jogo", "games", "game", "playstation", "xbox", "nintendo",
    )
    + _group(
        "Concerts", "concerto", "concertos", "concert", "concerts", "festival"
    )
    + _group("Sports", "desporto", "sports", "futebol", "football")
    + _group(
        "Subscriptions",
        "netflix", "spotify", "hbo", "disney", "streaming", "subscrição",
        "subscricao", "subscription",
    )
    # Shopping
    + _group(
        "Clothing",
        "roupa", "roupas", "clothes", "clothing", "vestuário", "vestuario",
    )
    + _group(
        "Electronics",
        "eletrónicos", "eletronicos", "electronics", "computador", "computer",
        "tablet", "portátil", "portatil", "laptop",
    )
    + _group(
        "Home & Garden",
        "casa", "jardim", "home", "garden", "decoração", "decoracao",
    )
    + _group("Personal Care", "higiene", "personal care", "cuidado pessoal")
    + _group("Gifts", "presente", "presentes", "gift", "gifts", "prenda", "prendas")
    # Bills & Utilities
    + _group("Electricity", "luz", "eletricidade", "electricity")
    + _group("Water", "água", "agua", "water")
    + _group("Internet", "internet", "wifi")
    + _group(
        "Phone",
        "telefone", "telefones", "phone", "telemóvel", "telemovel", "telemóveis",
        "telemoveis", "mobile",
    )
    + _group(
        "Rent/Mortgage", "renda", "aluguer", "rent", "hipoteca", "mortgage"
    )
    # Health
    + _group(
        "Medical",
        "médico", "medico", "médicos", "medicos", "doctor", "doctors", "hospital",
        "hospitais", "hospitals", "consulta", "consultas", "medical",
    )
    + _group(
        "Pharmacy",
        "farmácia", "farmacia", "farmácias", "farmacias", "pharmacy",
        "pharmacies", "medicamento", "medicamentos", "medicine",
    )
    + _group("Gym", "ginásio", "ginasio", "ginásios", "ginasios", "gym", "fitness")
    + _group(
        "Insurance", "seguro", "seguros", "insurance", "seguro saúde", "seguro saude"
    )
    # Education
    + _group(
        "Courses", "curso", "cursos", "course", "courses", "formação", "formacao"
    )
    + _group("Books", "livro", "livros", "book", "books")
    + _group("School Supplies", "material escolar", "school supplies")
    + _group("Tuition", "propina", "propinas", "tuition")
    # Investments
    + _group("Dividends", "dividendo", "dividendos", "dividend", "dividends")
    + _group("Interest", "juros", "interest")
    + _group("Capital Gains", "mais-valias", "capital gains")
    + _group("Rental Income", "arrendamento", "rental income")
    # Freelance
    + _group("Consulting", "consultoria", "consulting")
    + _group("Projects", "projeto", "projetos", "project", "projects")
    + _group("Gigs", "trabalho", "gig", "gigs")
    # Other Income
    + _group("Refunds", "reembolso", "reembolsos", "refund", "refunds")
    + _group("Cashback", "cashback")
    + _group("Reimbursements", "devolução", "devolucao", "reimbursement")
    # Other Expenses
    + _group("Miscellaneous", "diversos", "miscellaneous")
    + _group("Fees", "taxa", "taxas", "fees", "comissão bancária")
    + _group(
        "Donations",
        "doação", "doacao", "doações", "doacoes", "donation", "donations",
        "caridade",
    )
)


# ---------------------------------------------------------------------------
# Legacy one-step vocabulary
# ---------------------------------------------------------------------------

LEGACY_CATEGORY_KEYWORDS = KeywordTable(
    _group(
        "Food",
        "supermercado", "supermarket", "mercado", "grocery", "groceries",
        "restaurante", "restaurant", "café", "cafe", "coffee", "almoço",
        "lunch", "jantar", "dinner", "comida", "food",
    )
    + _group(
        "Transport",
        "uber", "taxi", "gasolina", "gas", "fuel", "combustível", "transporte",
        "transport", "metro", "bus", "ônibus",
    )
    + _group(
        "Income", "salário", "salary", "renda", "income", "pagamento", "payment"
    )
    + _group("Entertainment", "cinema", "movie", "filme", "netflix", "spotify")
    + _group("Shopping", "roupa", "clothes", "loja", "store", "shopping")
    + _group(
        "Bills",
        "conta", "bill", "luz", "electricity", "água", "water", "internet",
        "telefone", "phone",
    )
    + _group(
        "Health",
        "farmácia", "pharmacy", "médico", "doctor", "hospital", "saúde",
        "health",
    )
)

# Per-category subcategory rules for the legacy flow, checked in order; the
# first rule with any keyword present wins, otherwise "General".
LEGACY_SUBCATEGORY_RULES: dict[str, tuple[tuple[str, tuple[str, ...]], ...]] = {
    "Food": (
        ("Groceries", ("supermercado", "supermarket", "mercado", "grocery", "groceries")),
        ("Restaurant", ("restaurante", "restaurant")),
        ("Coffee", ("café", "cafe", "coffee")),
        ("Lunch", ("almoço", "lunch")),
        ("Dinner", ("jantar", "dinner")),
    ),
    "Transport": (
        ("Ride", ("uber", "taxi")),
        ("Fuel", ("gasolina", "gas", "fuel", "combustível")),
        ("Public Transport", ("metro", "bus", "ônibus")),
    ),
    "Income": (("Salary", ("salário", "salary")),),
    "Entertainment": (
        ("Movies", ("cinema", "movie", "filme")),
        ("Streaming", ("netflix", "spotify")),
    ),
    "Bills": (
        ("Electricity", ("luz", "electricity")),
        ("Water", ("água", "water")),
        ("Internet", ("internet",)),
        ("Phone", ("telefone", "phone")),
    ),
    "Health": (
        ("Pharmacy", ("farmácia", "pharmacy")),
        ("Doctor", ("médico", "doctor")),
        ("Hospital", ("hospital",)),
    ),
}


__all__ = [
    "KeywordHit",
    "KeywordTable",
    "word_pattern",
    "contains_word",
    "CREDIT_KEYWORDS",
    "DEBIT_KEYWORDS",
    "TYPE_KEYWORDS",
    "CATEGORY_KEYWORDS",
    "SUBCATEGORY_KEYWORDS",
    "LEGACY_CATEGORY_KEYWORDS",
    "LEGACY_SUBCATEGORY_RULES",
]
