"""Lookups over the static FAQ catalog."""

from ..models import MAX_ROW_TITLE_LENGTH, FAQQuestion

FAQ_ID_PREFIX = "faq_"


class FAQRepository:
    """Read-only access to per-product FAQ lists."""

    def __init__(self, catalog: dict[str, list[FAQQuestion]]):
        self._catalog = {product: tuple(faqs) for product, faqs in catalog.items()}
        self._by_id: dict[str, FAQQuestion] = {}
        self._product_of: dict[str, str] = {}
        self._by_question: dict[str, FAQQuestion] = {}

        problems = []
        for product, faqs in self._catalog.items():
            for faq in faqs:
                if faq.id in self._by_id:
                    problems.append(f"duplicate FAQ id '{faq.id}'")
                if not faq.id.startswith(FAQ_ID_PREFIX):
                    problems.append(f"FAQ id '{faq.id}' lacks '{FAQ_ID_PREFIX}' prefix")
                if len(faq.question) > MAX_ROW_TITLE_LENGTH:
                    problems.append(
                        f"FAQ '{faq.id}' question is over {MAX_ROW_TITLE_LENGTH} chars"
                    )
                self._by_id[faq.id] = faq
                self._product_of[faq.id] = product
                self._by_question.setdefault(faq.question.strip().lower(), faq)
        if problems:
            raise ValueError("; ".join(problems))

    @classmethod
    def default(cls) -> "FAQRepository":
        """Repository over the shipped product catalog."""
        from .catalog import CATALOG

        return cls(CATALOG)

    @property
    def products(self) -> list[str]:
        return list(self._catalog)

    def get_by_product(self, product: str) -> list[FAQQuestion]:
        return list(self._catalog.get(product, ()))

    def get_by_id(self, faq_id: str) -> FAQQuestion | None:
        return self._by_id.get(faq_id.strip().lower())

    def get_by_question(self, question_text: str) -> FAQQuestion | None:
        """Case-insensitive exact match on the question text."""
        return self._by_question.get(question_text.strip().lower())

    def product_of(self, faq_id: str) -> str | None:
        return self._product_of.get(faq_id)

    def find(self, text: str) -> FAQQuestion | None:
        """Match user input by question text, then by FAQ id."""
        faq = self.get_by_question(text)
        if faq is None and text.strip().lower().startswith(FAQ_ID_PREFIX):
            faq = self.get_by_id(text)
        return faq
