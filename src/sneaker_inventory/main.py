"""Print a summary of the local inventory."""

import asyncio

from sneaker_inventory.app_logging import configure_logging
from sneaker_inventory.config import Settings
from sneaker_inventory.containers import build_container
from sneaker_inventory.domain.models import Partition


def main(settings: Settings | None = None) -> None:
    """Print the size and value of the collection and the wishlist."""
    container = build_container(settings)
    configure_logging(container.settings.log_level)
    print("Sneaker Inventory")
    try:
        for partition in Partition:
            summary = container.view_service.summary(partition)
            currency = summary.currency.value if summary.currency else ""
            print(
                f"{partition.value.title()}: {summary.count} pairs, "
                f"total {summary.total_value:.2f} {currency}".rstrip()
            )
    finally:
        asyncio.run(container.close_resources())


if __name__ == "__main__":
    main()
