#!/usr/bin/env python3.13

#                          _ _
#  _ __ ___   ___  ___ ___(_|_) ___   ___ ___
# | '_ ` _ \ / _ \/ __/ __| | |/ _ \ / _ \ __|
# | | | | | |  __/\__ \__ \ | | (_) |  __\__ \
# |_| |_| |_|\___||___/___/_| |\___/ \___|___/ 🍳
#                         |__/
#
# table service for a four-table breakfast joint

# the table/order core (registry, ledger, billing, receipts) never touches the
# terminal. everything that prompts or prints lives in ServiceDesk and below.

import inspect
import logging
import os
import random
import signal
import sys
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Iterable, Iterator, Mapping, Sequence

from termcolor import cprint, colored
from colorama import just_fix_windows_console as enable_windows_ansi_interpretation

# fix windows terminal misinterpreting ansi escape sequences
enable_windows_ansi_interpretation()

logger = logging.getLogger("messijoe")

# constants
TABLE_QTY = 4
TABLE_CAPACITY = 4
TAX_RATE = Decimal("0.10")
TIP_RATE = Decimal("0.20")
TRANSACTION_ID_RANGE = (1000, 9999)
LOW_SEAT_WARNING = 2
RECEIPT_RULE = "-" * 25
CENT = Decimal("0.01")

# startup configuration
RECEIPT_DIR = os.environ.get("MESSIJOE_RECEIPT_DIR", ".")
LOG_LEVEL = os.environ.get("MESSIJOE_LOG_LEVEL", "WARNING")
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def configure_logging(level: str = LOG_LEVEL):
    """configure the root logger once at startup"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
    )


# helpers
def safe_int(value: str, minimum: int | None = None, maximum: int | None = None):
    """return int value or none if invalid / outside bounds"""
    try:
        v = int(value)
        if minimum is not None and v < minimum:
            return None
        if maximum is not None and v > maximum:
            return None
        return v
    except ValueError:
        return None

def format_money(amount: int | Decimal) -> str:
    """format amount with exactly two decimal places, halves rounded up"""
    return f"${Decimal(amount).quantize(CENT, ROUND_HALF_UP)}"

def color_money(amount: int | Decimal) -> str:
    """format amount as green money string"""
    return colored(format_money(amount), "green")

def format_rate(rate: Decimal) -> str:
    """render a rate as a percentage label, e.g. 0.20 -> 20%"""
    return f"{(rate * 100).normalize():f}%"

def parse_boolean_input(prompt: str) -> bool:
    """parse y/n style input; anything but y/yes is a no"""
    return prompt.lower().strip() in ("y", "yes")

# input collaborators
def read_bounded_int(minimum: int, maximum: int, prompt: str) -> int:
    """prompt until an integer in [minimum, maximum] is entered"""
    while True:
        value = safe_int(input(prompt).strip(), minimum, maximum)
        if value is not None:
            return value
        cprint("Invalid input. Try again.", "red")

def read_yes_no(prompt: str) -> bool:
    """single yes/no answer; anything but y/yes counts as no"""
    return parse_boolean_input(input(prompt))

# errors
class ServiceError(Exception):
    """base for every recoverable table/order failure"""

class InvalidTable(ServiceError):
    def __init__(self, table_id: int, table_qty: int):
        self.table_id = table_id
        self.table_qty = table_qty
        super().__init__(f"table {table_id} does not exist (tables are 1-{table_qty})")

class CapacityExceeded(ServiceError):
    def __init__(self, table_id: int, guest_count: int, available: int):
        self.table_id = table_id
        self.guest_count = guest_count
        self.available = available
        super().__init__(
            f"cannot seat {guest_count} guest(s) at table {table_id} ({available} seat(s) available)"
        )

class InvalidSelection(ServiceError):
    def __init__(self, selection: int, menu_size: int):
        self.selection = selection
        self.menu_size = menu_size
        super().__init__(f"menu item {selection} does not exist (items are 1-{menu_size})")

class NoOrder(ServiceError):
    def __init__(self, table_id: int):
        self.table_id = table_id
        super().__init__(f"no order found for table {table_id}")

class NotCompleted(ServiceError):
    def __init__(self, table_id: int):
        self.table_id = table_id
        super().__init__(f"order for table {table_id} is not completed yet")

class AlreadyPaid(ServiceError):
    def __init__(self, table_id: int):
        self.table_id = table_id
        super().__init__(f"order for table {table_id} has already been paid")

class OrderClosed(ServiceError):
    """raised when items are placed on an order that was already completed"""
    def __init__(self, table_id: int):
        self.table_id = table_id
        super().__init__(f"order for table {table_id} is closed to new items")

# domain models
@dataclass(frozen=True)
class MenuItem:
    """catalog entry; index is the 1-based number the operator types"""
    index: int
    name: str
    price: int

class MenuCatalog:
    """ordered, read-only list of menu items numbered 1..n"""
    def __init__(self, items: Sequence[MenuItem]):
        for position, item in enumerate(items, start=1):
            if item.index != position:
                raise ValueError(f"menu item {item.name!r} has index {item.index}, expected {position}")
            if item.price < 0:
                raise ValueError(f"menu item {item.name!r} has a negative price")
        self._items = tuple(items)

    @classmethod
    def from_entries(cls, entries: Iterable[tuple[str, int]]) -> "MenuCatalog":
        """number (name, price) pairs from 1 in the order given"""
        return cls([MenuItem(i, name, price) for i, (name, price) in enumerate(entries, start=1)])

    def get(self, index: int) -> MenuItem:
        """look up an item by its menu number"""
        if not 1 <= index <= len(self._items):
            raise InvalidSelection(index, len(self._items))
        return self._items[index - 1]

    def __iter__(self) -> Iterator[MenuItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

MENU_CATALOG = MenuCatalog.from_entries([
    ("Raw Fish", 35),
    ("Eggs", 45),
    ("Ham", 38),
    ("Biscuits", 38),
    ("Toast", 38),
])

@dataclass
class Table:
    """a seating unit; seated_guests stays within 0..capacity"""
    id: int
    capacity: int = TABLE_CAPACITY
    seated_guests: int = 0

    @property
    def available_seats(self) -> int:
        return self.capacity - self.seated_guests

class OrderStatus(Enum):
    """status of a table's order as shown to the operator"""
    NO_ORDER = "no order"
    AWAITING_COMPLETION = "awaiting completion"
    AWAITING_PAYMENT = "awaiting payment"
    DONE = "all done"

@dataclass
class Order:
    """items ordered at one table plus the completion/payment flags"""
    table_id: int
    items: list[MenuItem] = field(default_factory=list)
    is_completed: bool = False
    is_paid: bool = False

    @property
    def status(self) -> OrderStatus:
        if not self.is_completed:
            return OrderStatus.AWAITING_COMPLETION
        if not self.is_paid:
            return OrderStatus.AWAITING_PAYMENT
        return OrderStatus.DONE

@dataclass(frozen=True)
class Bill:
    """unrounded amounts; round only when formatting"""
    subtotal: int
    tax: Decimal
    tip: Decimal
    total: Decimal
    tax_rate: Decimal = TAX_RATE
    tip_rate: Decimal = TIP_RATE

@dataclass(frozen=True)
class PaymentResult:
    table_id: int
    bill: Bill
    paid: bool

# billing
def compute_bill(items: Iterable[MenuItem], tax_rate: Decimal = TAX_RATE, tip_rate: Decimal = TIP_RATE) -> Bill:
    """subtotal, tax, tip and total for a sequence of items"""
    subtotal = sum(item.price for item in items)
    tax = subtotal * tax_rate
    tip = subtotal * tip_rate
    return Bill(
        subtotal=subtotal,
        tax=tax,
        tip=tip,
        total=subtotal + tax + tip,
        tax_rate=tax_rate,
        tip_rate=tip_rate,
    )

# table management
class TableRegistry:
    """capacity accounting for the fixed set of tables"""
    def __init__(self, table_qty: int = TABLE_QTY, capacity: int = TABLE_CAPACITY):
        if table_qty < 1 or capacity < 1:
            raise ValueError("table_qty and capacity must be positive")
        self.table_qty = table_qty
        self._tables = {i: Table(i, capacity) for i in range(1, table_qty + 1)}

    @property
    def table_ids(self) -> range:
        return range(1, self.table_qty + 1)

    def __iter__(self) -> Iterator[Table]:
        return iter(self._tables.values())

    def table(self, table_id: int) -> Table:
        """return table by id or raise InvalidTable"""
        try:
            return self._tables[table_id]
        except KeyError:
            raise InvalidTable(table_id, self.table_qty) from None

    def available_seats(self, table_id: int) -> int:
        return self.table(table_id).available_seats

    def check_seating(self, table_id: int, guest_count: int):
        """raise CapacityExceeded unless 0 < guest_count <= available seats"""
        available = self.available_seats(table_id)
        if not 0 < guest_count <= available:
            raise CapacityExceeded(table_id, guest_count, available)

    def seat(self, table_id: int, guest_count: int):
        """seat guests; nothing changes if they do not fit"""
        self.check_seating(table_id, guest_count)
        self.table(table_id).seated_guests += guest_count

    def release_all(self, table_id: int):
        """turn the table over"""
        self.table(table_id).seated_guests = 0

# order management
class OrderLedger:
    """
    owns every order and the rules for moving it along
    no order -> open -> completed -> paid, with paid terminal.
    every operation validates fully before mutating, so a raised
    ServiceError leaves tables and orders exactly as they were.
    """
    def __init__(self, tables: TableRegistry, catalog: MenuCatalog = MENU_CATALOG,
                 tax_rate: Decimal = TAX_RATE, tip_rate: Decimal = TIP_RATE):
        self.tables = tables
        self.catalog = catalog
        self.tax_rate = tax_rate
        self.tip_rate = tip_rate
        self._orders: dict[int, Order] = {}

    @property
    def orders(self) -> Mapping[int, Order]:
        """read-only view of orders keyed by table id"""
        return MappingProxyType(self._orders)

    def order_for(self, table_id: int) -> Order | None:
        self.tables.table(table_id)
        return self._orders.get(table_id)

    def _require_order(self, table_id: int) -> Order:
        order = self.order_for(table_id)
        if order is None:
            raise NoOrder(table_id)
        return order

    def _require_payable(self, table_id: int) -> Order:
        order = self._require_order(table_id)
        if not order.is_completed:
            raise NotCompleted(table_id)
        if order.is_paid:
            raise AlreadyPaid(table_id)
        return order

    def place_order(self, table_id: int, guest_count: int, selections: Sequence[int]) -> Order:
        """seat guests and append one item per selection to the table's order"""
        order = self.order_for(table_id)
        if order is not None and order.is_completed:
            raise OrderClosed(table_id)
        items = [self.catalog.get(selection) for selection in selections]
        self.tables.check_seating(table_id, guest_count)

        self.tables.seat(table_id, guest_count)
        if order is None:
            order = self._orders[table_id] = Order(table_id)
        order.items.extend(items)
        return order

    def mark_completed(self, table_id: int) -> Order:
        """mark the table's order as complete; repeating it changes nothing"""
        order = self._require_order(table_id)
        order.is_completed = True
        return order

    def bill_for(self, table_id: int) -> Bill:
        """preview the bill of a completed, unpaid order"""
        order = self._require_payable(table_id)
        return compute_bill(order.items, self.tax_rate, self.tip_rate)

    def record_payment(self, table_id: int, confirm: Callable[[Bill], bool] | bool) -> PaymentResult:
        """
        bill a completed order and, if confirmed, mark it paid and free the table.
        confirm is either a bool or a callable that receives the bill first.
        """
        order = self._require_payable(table_id)
        bill = compute_bill(order.items, self.tax_rate, self.tip_rate)
        approved = confirm(bill) if callable(confirm) else bool(confirm)
        if not approved:
            return PaymentResult(table_id, bill, paid=False)
        order.is_paid = True
        self.tables.release_all(table_id)
        return PaymentResult(table_id, bill, paid=True)

    def all_settled(self) -> bool:
        """true when every order is completed and paid (or there are none)"""
        return all(o.is_completed and o.is_paid for o in self._orders.values())

    def has_pending(self) -> bool:
        """true when at least one order still needs completing or paying"""
        return bool(self._orders) and not self.all_settled()

    def status_of(self, table_id: int) -> OrderStatus:
        order = self.order_for(table_id)
        return OrderStatus.NO_ORDER if order is None else order.status

    def statuses(self) -> list[tuple[int, OrderStatus]]:
        return [(table_id, self.status_of(table_id)) for table_id in self.tables.table_ids]

# receipts
@dataclass(frozen=True)
class Receipt:
    transaction_id: int
    table_id: int
    lines: tuple[str, ...]

    @property
    def filename(self) -> str:
        return f"Transaction#{self.transaction_id}.txt"

    @property
    def text(self) -> str:
        return "\n".join(self.lines) + "\n"

def new_transaction_id(rng: random.Random | None = None) -> int:
    """random 4-digit id; collisions are possible and overwrite the older file"""
    low, high = TRANSACTION_ID_RANGE
    return (rng or random).randint(low, high)

def build_receipt(order: Order, bill: Bill, transaction_id: int | None = None,
                  rng: random.Random | None = None) -> Receipt:
    """itemised receipt for a paid order"""
    if not order.is_paid:
        raise ValueError(f"order for table {order.table_id} is not paid")
    if transaction_id is None:
        transaction_id = new_transaction_id(rng)
    lines = [f"*** RECEIPT FOR TABLE {order.table_id} ***", RECEIPT_RULE]
    lines += [f"{item.name} - {format_money(item.price)}" for item in order.items]
    lines += [
        RECEIPT_RULE,
        f"Subtotal: {format_money(bill.subtotal)}",
        f"Tip ({format_rate(bill.tip_rate)}): {format_money(bill.tip)}",
        f"Tax ({format_rate(bill.tax_rate)}): {format_money(bill.tax)}",
        f"Total: {format_money(bill.total)}",
    ]
    return Receipt(transaction_id, order.table_id, tuple(lines))

class ReceiptWriter:
    """write receipts as utf-8 text files into one directory"""
    def __init__(self, directory: str | Path = RECEIPT_DIR):
        self.directory = Path(directory)

    def write(self, receipt: Receipt) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / receipt.filename
        path.write_text(receipt.text, encoding="utf-8")
        return path

# operator console
class ServiceDesk:
    """prompt the operator, drive the ledger, report outcomes"""
    def __init__(self, tables: TableRegistry, ledger: OrderLedger, writer: ReceiptWriter,
                 rng: random.Random | None = None):
        self.tables = tables
        self.ledger = ledger
        self.writer = writer
        self.rng = rng

    # input helpers
    def _resolve_int(self, raw: str | None, minimum: int, maximum: int, prompt: str) -> int:
        """use a command argument if valid, otherwise fall back to prompting"""
        if raw is not None:
            value = safe_int(raw, minimum, maximum)
            if value is not None:
                return value
            cprint(f"'{raw}' is not between {minimum} and {maximum}", "red")
        return read_bounded_int(minimum, maximum, prompt)

    def _ask_table(self, raw: str | None, prompt: str) -> int:
        return self._resolve_int(raw, 1, self.tables.table_qty, prompt)

    @staticmethod
    def _reject(error: ServiceError):
        cprint(str(error), "red")
        logger.warning("rejected: %s", error)

    # public actions
    def show_menu(self):
        """print the catalog"""
        cprint("--- Menu ---", None, attrs=["bold"])
        for item in self.ledger.catalog:
            print(f"{item.index}. {item.name} - {color_money(item.price)}")

    def check_status(self):
        """print one line per table that has an order"""
        shown = False
        for table_id, status in self.ledger.statuses():
            if status is OrderStatus.NO_ORDER:
                continue
            table = self.tables.table(table_id)
            print(f"Table #{table_id} status: {status.value} "
                  f"({table.seated_guests}/{table.capacity} seated)")
            shown = True
        if not shown:
            cprint("no orders yet", "yellow")

    def _announce_seats(self, table_id: int, available: int):
        plural = "" if available == 1 else "s"
        if available <= LOW_SEAT_WARNING:
            cprint(f"Act quickly! Only {available} seat{plural} left at this table.", "yellow")
        else:
            verb = "is" if available == 1 else "are"
            cprint(f"There {verb} {available} seat{plural} available at table {table_id}.", "cyan")

    def place_order(self, table: str | None = None, guests: str | None = None):
        """seat guests at a table and take one item per guest"""
        qty = self.tables.table_qty
        table_id = self._ask_table(table, f"Enter table number (1-{qty}): ")
        if self.ledger.status_of(table_id) in (OrderStatus.AWAITING_PAYMENT, OrderStatus.DONE):
            cprint(f"Table {table_id}'s order is already complete; no new items.", "red"); return
        available = self.tables.available_seats(table_id)
        if available <= 0:
            cprint(f"Sorry! Table {table_id} is full.", "red"); return
        self._announce_seats(table_id, available)

        guest_count = self._resolve_int(guests, 1, available, "Enter number of guests to seat: ")
        self.show_menu()
        selections = [
            read_bounded_int(1, len(self.ledger.catalog), f"Guest {i}, enter item number: ")
            for i in range(1, guest_count + 1)
        ]
        try:
            order = self.ledger.place_order(table_id, guest_count, selections)
        except ServiceError as e:
            self._reject(e); return
        logger.info("table %d: seated %d, order now has %d item(s)", table_id, guest_count, len(order.items))
        cprint(f"Order placed for table {table_id} successfully.", "green")

    def _pending_table(self, table: str | None, prompt: str) -> int | None:
        """pick a table for complete/pay, or none if nothing is outstanding"""
        if not self.ledger.has_pending():
            cprint("No pending orders / all have been completed and paid.", "yellow")
            return None
        if table is None:
            self.check_status()
        return self._ask_table(table, prompt)

    def complete_order(self, table: str | None = None):
        """mark a table's order complete so it can be paid"""
        table_id = self._pending_table(table, "Enter table number to complete order: ")
        if table_id is None:
            return
        was_completed = self.ledger.status_of(table_id) in (OrderStatus.AWAITING_PAYMENT, OrderStatus.DONE)
        try:
            self.ledger.mark_completed(table_id)
        except ServiceError as e:
            self._reject(e); return
        if was_completed:
            cprint(f"Order for table {table_id} was already complete.", "yellow"); return
        logger.info("table %d: order completed", table_id)
        cprint(f"Order for table {table_id}: marked as complete, awaiting payment.", "green")

    @staticmethod
    def _confirm_payment(bill: Bill) -> bool:
        print(f"Subtotal: {color_money(bill.subtotal)}")
        print(f"Tax: {color_money(bill.tax)}")
        print(f"Tip: {color_money(bill.tip)}")
        print(f"Total: {color_money(bill.total)}")
        return read_yes_no("Confirm payment? (y/n): ")

    def pay_order(self, table: str | None = None):
        """show the bill, take payment and save the receipt"""
        table_id = self._pending_table(table, "Enter table number to pay: ")
        if table_id is None:
            return
        try:
            result = self.ledger.record_payment(table_id, self._confirm_payment)
        except ServiceError as e:
            if isinstance(e, NotCompleted):
                cprint("Please complete the order before payment.", "yellow")
            self._reject(e); return
        if not result.paid:
            logger.info("table %d: payment cancelled", table_id)
            cprint("Payment cancelled.", "yellow"); return

        logger.info("table %d: paid %s", table_id, format_money(result.bill.total))
        receipt = build_receipt(self.ledger.order_for(table_id), result.bill, rng=self.rng)
        try:
            path = self.writer.write(receipt)
        except OSError as e:
            logger.error("could not write %s: %s", receipt.filename, e)
            cprint(f"Payment recorded, but the receipt could not be saved: {e}", "red"); return
        logger.info("receipt written to %s", path)
        cprint(f"Payment successful. Receipt saved to '{path}'.", "green")

    def close_session(self) -> bool:
        """allow closing only once every order is completed and paid"""
        if self.ledger.all_settled():
            cprint("Goodbye!", "green")
            return True
        cprint("Cannot close, orders still pending.", "red")
        self.check_status()
        return False

# command infrastructure
class Command:
    """bind a command name to a function"""
    def __init__(self, name: str, function: Callable, description: str):
        self.name = name
        self._fn = function
        self.description = description

    def execute(self, tokens: list[str]):
        """validate arg count and invoke function"""
        sig = inspect.signature(self._fn)
        params = list(sig.parameters.values())
        required = sum(
            p.default is inspect.Parameter.empty and p.kind in (
                inspect.Parameter.POSITIONAL_OR_KEYWORD,
                inspect.Parameter.POSITIONAL_ONLY
            )
            for p in params
        )
        if not (required <= len(tokens) <= len(params)):
            cprint(f"invalid args for '{self.name}' (expected {required}-{len(params)}, got {len(tokens)})", "red")
            return
        return self._fn(*tokens)

class CommandParser:
    """simple repl parser"""
    def __init__(self, desk: ServiceDesk):
        self.desk = desk
        self.running = True
        self.commands: list[Command] = [
            Command("help", self.show_help, "show this help"),
            Command("h", self.show_help, "alias help"),
            Command("close", self.close, "close the restaurant (all orders settled)"),
            Command("quit", self.close, "alias close"),
            Command("exit", self.close, "alias close"),
        ]

    def parse_and_execute(self, input_str: str):
        """parse the raw input string and attempt to execute a command"""
        tokens = input_str.strip().split()
        if not tokens:
            return
        for cmd in self.commands:
            parts = cmd.name.split()
            if tokens[:len(parts)] != parts:
                continue
            return cmd.execute(tokens[len(parts):])
        cprint("unknown command. type 'help'", "red")

    def show_help(self):
        """display help with all available command names and descriptions"""
        cprint("available commands:", "green", attrs=["bold"])
        width = max(len(c.name) for c in self.commands)
        for cmd in self.commands:
            sig = inspect.signature(cmd._fn)
            params = " ".join(
                f"<{p}>" if prm.default is inspect.Parameter.empty else f"[{p}]"
                for p, prm in sig.parameters.items()
            )
            line = f"{colored(cmd.name, 'blue')} {colored(params, 'cyan')}".strip()
            print(line.ljust(width + 25), "-", cmd.description)

    def close(self):
        """stop the repl if the session may end"""
        if self.desk.close_session():
            self.running = False

    def start_repl(self):
        """main repl loop"""
        while self.running:
            try:
                user_input = input(colored("\n> ", "blue")).strip()
                if user_input:
                    self.parse_and_execute(user_input)
            except EOFError:
                print()
                if not self.desk.ledger.all_settled():
                    logger.warning("input closed with orders still pending")
                break

# application wiring
class Application:
    """bootstrap objects & hand them to the repl"""
    def __init__(self, receipt_dir: str | Path = RECEIPT_DIR, rng: random.Random | None = None):
        self.tables = TableRegistry()
        self.ledger = OrderLedger(self.tables)
        self.desk = ServiceDesk(self.tables, self.ledger, ReceiptWriter(receipt_dir), rng)
        self.parser = CommandParser(self.desk)

        self.parser.commands += [
            Command("menu", self.desk.show_menu, "show menu"),
            Command("status", self.desk.check_status, "show table status"),
            Command("order place", self.desk.place_order, "seat guests and take their order"),
            Command("order complete", self.desk.complete_order, "mark an order complete"),
            Command("order pay", self.desk.pay_order, "calculate and pay a bill"),
        ]

    def run(self, *args: str):
        """print the banner, run any command given on the command line, then the repl"""
        cprint("\n--- MESSIJOE'S MAIN MENU ---", "green", attrs=["bold"])
        print("""seat guests, take orders, settle bills.

for more information, type 'help' or 'h' at any time.
type 'close' once every order is completed and paid.""")

        if args:
            self.parser.parse_and_execute(" ".join(args))
        self.parser.start_repl()

# signal handler
class SignalHandler:
    """custom ctrl+c handler to nag user politely"""
    @staticmethod
    def sigint(_, __):
        """handle ctrl+c"""
        cprint("\nnext time, use close!", "yellow")
        sys.exit(0)

# entry point
def main():
    """entrypoint wrapper"""
    configure_logging()
    signal.signal(signal.SIGINT, SignalHandler.sigint)
    Application().run(*sys.argv[1:])

if __name__ == "__main__":
    main()
