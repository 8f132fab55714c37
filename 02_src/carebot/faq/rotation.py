"""Per-user FAQ rotation without repeats."""

import random

from ..keyed_lock import KeyedLock
from ..logging_config import get_logger
from ..models import FAQQuestion
from .repository import FAQRepository

logger = get_logger(__name__)


class FAQRotationTracker:
    """Remembers which FAQs each user has seen, per product.

    History lives in memory only and grows until reset; the catalog is small
    and bounded per product.
    """

    def __init__(self, repository: FAQRepository, rng: random.Random | None = None):
        self._repository = repository
        self._rng = rng or random.Random()
        self._history: dict[str, dict[str, set[str]]] = {}  # user -> product -> ids
        self._locks = KeyedLock()

    def get_random_faqs(
        self, user_id: str, product: str, count: int = 3
    ) -> list[FAQQuestion]:
        """Draw ``count`` FAQs the user has not been asked yet.

        When fewer than ``count`` remain unseen, the product history is reset
        and the draw is made from the full set.
        """
        all_faqs = self._repository.get_by_product(product)

        with self._locks.hold(user_id):
            asked = self._history.get(user_id, {}).get(product, set())
            available = [faq for faq in all_faqs if faq.id not in asked]

            if len(available) < count:
                logger.info(
                    "FAQs exhausted for %s/%s, resetting history",
                    user_id,
                    product,
                    extra={"room_id": user_id},
                )
                self._reset(user_id, product)
                available = all_faqs

            return self._rng.sample(available, min(count, len(available)))

    def mark_as_asked(self, user_id: str, product: str, faq_id: str) -> None:
        with self._locks.hold(user_id):
            products = self._history.setdefault(user_id, {})
            products.setdefault(product, set()).add(faq_id)
        logger.debug("Marked %s as asked for %s/%s", faq_id, user_id, product)

    def asked(self, user_id: str, product: str) -> set[str]:
        with self._locks.hold(user_id):
            return set(self._history.get(user_id, {}).get(product, set()))

    def reset_history(self, user_id: str, product: str) -> None:
        with self._locks.hold(user_id):
            self._reset(user_id, product)

    def reset_all_history(self, user_id: str) -> None:
        with self._locks.hold(user_id):
            self._history.pop(user_id, None)

    def get_stats(self, user_id: str, product: str) -> dict:
        total = len(self._repository.get_by_product(product))
        asked = len(self.asked(user_id, product))
        return {"total": total, "asked": asked, "remaining": total - asked}

    def _reset(self, user_id: str, product: str) -> None:
        products = self._history.get(user_id)
        if products:
            products.pop(product, None)
