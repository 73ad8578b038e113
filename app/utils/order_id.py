import random

from app.config import settings


def generate_order_id(prefix: str | None = None, rng: random.Random | None = None) -> str:
    """
    Human facing order label, e.g. ``ORD0427``.

    Four random digits give only 10,000 labels and nothing checks for
    collisions, so two orders can share a label. Use ``Order.id`` as the
    key; this is for display only.
    """
    prefix = settings.order_id_prefix if prefix is None else prefix
    rng = rng or random
    return f"{prefix}{rng.randint(0, 9999):04d}"
