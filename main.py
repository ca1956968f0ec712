"""
Bookshop demo runner.

Builds the demo catalog, places a book order and a periodical subscription,
and prints the placement events and receipts. With ``--interactive`` the
main menu follows, where publications can be added and ordered.
"""

import argparse
import os
import sys
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, List, Optional, Type

from bookshop.domain.exceptions import BookshopError, CatalogError
from bookshop.domain.interfaces.base import ILogger
from bookshop.domain.models.catalog import Periodical, Publication, RecurrencePeriod
from bookshop.domain.models.configuration import StoreConfiguration
from bookshop.domain.models.order import OrderReceipt
from bookshop.infrastructure.configuration.manager import ConfigurationManager
from bookshop.infrastructure.error_handling.handler import ErrorHandler
from bookshop.infrastructure.formatting.currency import CurrencyFormatter
from bookshop.infrastructure.identifiers.allocator import SequentialIdAllocator
from bookshop.infrastructure.input.validators import Prompter
from bookshop.infrastructure.logging.logger import LoggerFactory
from bookshop.application.services.catalog import Catalog, ItemT
from bookshop.application.services.ordering import OrderingService

MENU = (
    "=== Main menu ===",
    "1) Show catalog",
    "2) Add book",
    "3) Add periodical",
    "4) Place order (book)",
    "5) Place order (periodical + subscription)",
    "0) Exit",
)


@dataclass
class Application:
    """Wired components of one run."""
    config: StoreConfiguration
    logger: ILogger
    error_handler: ErrorHandler
    formatter: CurrencyFormatter
    catalog: Catalog
    ordering: OrderingService

    def apply_configuration(self, config: StoreConfiguration) -> None:
        """Switch to a reloaded configuration; amounts and dates rendered afterwards use it."""
        self.config = config
        self.formatter.config = config
        self.logger.info("Configuration applied", component="shop",
                         currency_symbol=config.currency_symbol, date_format=config.date_format)


def build_demo_catalog() -> Catalog:
    """The starting catalog; two of the prices fall outside [5, 50] and are clamped."""
    return Catalog([
        Publication("978-90-01-00001", "C# Basics", "NoorderBoek", Decimal("39.95")),
        Publication("978-90-01-00002", "Patterns in Practice", "ZuidUitgeverij", Decimal("55.00")),
        Periodical("977-12-34-00001", "Dev Weekly", "CodePress", Decimal("6.00"),
                   RecurrencePeriod.WEEKLY),
        Periodical("977-12-34-00002", "Tech Monthly", "BitHouse", Decimal("3.00"),
                   RecurrencePeriod.MONTHLY),
    ])


def build_application(config: StoreConfiguration, logger: ILogger,
                      output: Callable[[str], None] = print,
                      config_manager: Optional[ConfigurationManager] = None) -> Application:
    """Wire formatter, allocator, catalog and ordering service.

    When a configuration manager is given, every successful reload is applied
    to the running application.
    """
    formatter = CurrencyFormatter(config)

    def print_event(source, message: str) -> None:
        output("")
        output(">> EVENT: " + message)
        output("")

    ordering = OrderingService(
        allocator=SequentialIdAllocator(),
        logger=logger,
        formatter=formatter,
        observers=[print_event]
    )

    app = Application(
        config=config,
        logger=logger,
        error_handler=ErrorHandler(logger),
        formatter=formatter,
        catalog=build_demo_catalog(),
        ordering=ordering
    )

    if config_manager is not None:
        config_manager.add_change_callback(
            lambda data: app.apply_configuration(config_manager.get_store_config())
        )
    return app


def format_receipt(label: str, receipt: OrderReceipt, formatter: CurrencyFormatter) -> str:
    return (f"Receipt ({label}): (ISBN: {receipt.item_identifier}, "
            f"Quantity: {receipt.quantity}, Total: {formatter(receipt.total_price)})")


def run_demo(app: Application, output: Callable[[str], None] = print) -> int:
    """Print the catalog and place the two demo orders. Returns a process exit code."""
    try:
        output("=== Catalog ===")
        for item in app.catalog:
            output(item.describe(app.formatter))
        output("")

        book = app.catalog.get("978-90-01-00001")
        book_order = app.ordering.create_book_order(book, 3)
        receipt = app.ordering.place(book_order)
        output(format_receipt("Book", receipt, app.formatter))

        periodical = app.catalog.select(1, Periodical)
        subscription = app.ordering.create_subscription_order(periodical, 2, 3)
        receipt = app.ordering.place(subscription)
        output(format_receipt("Periodical", receipt, app.formatter))

        output("")
        output("=== Orders ===")
        for order in (book_order, subscription):
            output(order.describe(app.config.date_format))
        return 0

    except BookshopError as e:
        output(app.error_handler.handle_error(e, {'component': 'demo'}))
        return 1


def choose_item(app: Application, prompter: Prompter, kind: Type[ItemT],
                output: Callable[[str], None] = print) -> ItemT:
    """Show the numbered listing for ``kind`` and read the user's pick."""
    lines = app.catalog.numbered_lines(kind, app.formatter)
    if not lines:
        raise CatalogError("No items found.", context={'kind': kind.__name__})

    for line in lines:
        output(line)
    number = prompter.read_int_in_range(f"Choose (1-{len(lines)}): ", 1, len(lines), "selection")
    return app.catalog.select(number, kind)


def _handle_choice(choice: int, app: Application, prompter: Prompter,
                   output: Callable[[str], None]) -> None:
    if choice == 1:
        for item in app.catalog:
            output(item.describe(app.formatter))
        output("")

    elif choice == 2:
        app.catalog.add(prompter.read_publication())
        output("Book added.")
        output("")

    elif choice == 3:
        app.catalog.add(prompter.read_periodical())
        output("Periodical added.")
        output("")

    elif choice == 4:
        item = choose_item(app, prompter, Publication, output)
        quantity = prompter.read_int_min("Quantity (>= 1): ", 1, "quantity")
        receipt = app.ordering.place(app.ordering.create_book_order(item, quantity))
        output(format_receipt("Book", receipt, app.formatter))
        output("")

    elif choice == 5:
        periodical = choose_item(app, prompter, Periodical, output)
        quantity = prompter.read_int_min("Quantity per delivery (>= 1): ", 1, "quantity")
        months = prompter.read_int_min("Subscription (months, >= 1): ", 1, "subscription_months")
        order = app.ordering.create_subscription_order(periodical, quantity, months)
        receipt = app.ordering.place(order)
        output(format_receipt("Periodical", receipt, app.formatter))
        output("")


def run_interactive(app: Application, prompter: Prompter,
                    output: Callable[[str], None] = print) -> int:
    """Main menu loop. Shop errors are reported and the menu is shown again."""
    while True:
        for line in MENU:
            output(line)

        try:
            choice = prompter.read_int_in_range("Choice: ", 0, 5, "menu")
            output("")
            if choice == 0:
                return 0
            _handle_choice(choice, app, prompter, output)
        except BookshopError as e:
            output(app.error_handler.handle_error(e, {'component': 'menu'}))
            output("")
        except (EOFError, KeyboardInterrupt):
            output("")
            return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bookshop",
        description="Bookshop order and pricing demo"
    )
    parser.add_argument(
        "-c", "--config",
        default=os.path.join(os.path.dirname(os.path.abspath(__file__)), "config.json"),
        help="Configuration file; written with defaults when missing"
    )
    parser.add_argument(
        "-i", "--interactive",
        action="store_true",
        help="Open the main menu after the demo orders"
    )
    return parser


def main(argv: Optional[List[str]] = None,
         input_func: Callable[[str], str] = input) -> int:
    """Entry point. Returns a process exit code."""
    args = create_parser().parse_args(argv)

    bootstrap_logger = LoggerFactory.create_component_logger("startup", StoreConfiguration())
    try:
        config_manager = ConfigurationManager(args.config, bootstrap_logger)
    except BookshopError as e:
        print(ErrorHandler(bootstrap_logger).handle_error(e, {'component': 'startup'}))
        return 1

    with config_manager:
        config = config_manager.get_store_config()
        logger = LoggerFactory.create_component_logger("shop", config)
        app = build_application(config, logger, config_manager=config_manager)

        exit_code = run_demo(app)
        if exit_code != 0 or not args.interactive:
            return exit_code

        config_manager.start_hot_reload()
        print()
        return run_interactive(app, Prompter(app.error_handler, input_func=input_func))


if __name__ == "__main__":
    sys.exit(main())
