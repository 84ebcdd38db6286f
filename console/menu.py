"""Interactive console menus for the wallet."""

import logging
import re
from decimal import Decimal, InvalidOperation

from tabulate import tabulate

from config.settings import Settings
from upi_wallet.models.exceptions import (
    AccountNotFoundError,
    DuplicateAccountError,
    InsufficientBalanceError,
    InvalidAccountIdError,
    InvalidAmountError,
    InvalidCredentialError,
    SelfTransferError,
)
from upi_wallet.models.ledger_entry import ENTRY_DEPOSIT, ENTRY_RECEIVED, ENTRY_SENT
from upi_wallet.services.ledger_service import Ledger

logger = logging.getLogger(__name__)

UPI_ID_PATTERN = re.compile(r'[a-z0-9._+-]+@[a-z0-9.-]+')
PIN_PATTERN = re.compile(r'[0-9]{4}')
AMOUNT_PATTERN = re.compile(r'[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?')


def valid_upi_id(upi_id: str) -> bool:
    return UPI_ID_PATTERN.fullmatch(upi_id) is not None


def valid_pin(pin: str) -> bool:
    return PIN_PATTERN.fullmatch(pin) is not None


def parse_amount(text: str) -> Decimal | None:
    """Parse a typed amount, returning None unless it is a plain ASCII decimal number."""
    text = text.strip()
    if AMOUNT_PATTERN.fullmatch(text) is None:
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


class WalletConsole:
    """Guest and user menus on top of a Ledger.

    The console owns the session (the logged-in account) and all text
    formatting; every balance change goes through the ledger.
    """

    def __init__(self, ledger: Ledger, settings: Settings, input_func=input, output_func=print):
        self.ledger = ledger
        self.settings = settings
        self._input = input_func
        self._output = output_func
        self.current_id = None
        self.current_name = None

    def _ask(self, prompt):
        return self._input(prompt).strip()

    def _say(self, text):
        self._output(text)

    def _money(self, amount):
        return f"{self.settings.currency_symbol}{amount:.2f}"

    def run(self):
        """Show menus until the user exits or input runs out."""
        try:
            while self.step():
                pass
        except EOFError:
            self._say('\nInput closed. Goodbye!')

    def step(self):
        """Handle one menu selection. Returns False once the user exits."""
        if self.current_id is None:
            return self._guest_menu()
        self._user_menu()
        return True

    def _guest_menu(self):
        self._say('\n=== UPI Management ===')
        self._say('1. Register')
        self._say('2. Login')
        self._say('3. Exit')
        choice = self._ask('Select: ')
        if choice == '1':
            self.register()
        elif choice == '2':
            self.login()
        elif choice == '3':
            self._say('Exiting. Goodbye!')
            return False
        else:
            self._say('Invalid selection.')
        return True

    def _user_menu(self):
        self._say(f'\n=== Welcome, {self.current_name} ({self.current_id}) ===')
        self._say('1. View Balance')
        self._say('2. Add Money')
        self._say('3. Send Money')
        self._say('4. Transaction History')
        self._say('5. Logout')
        choice = self._ask('Select: ')
        actions = {
            '1': self.view_balance,
            '2': self.add_money,
            '3': self.send_money,
            '4': self.show_history,
            '5': self.logout,
        }
        action = actions.get(choice)
        if action is None:
            self._say('Invalid selection.')
        else:
            action()

    def register(self):
        name = self._ask('Enter full name: ')
        if not name:
            self._say('Name cannot be empty.')
            return

        upi_id = self._ask('Choose UPI ID (example: name@upi): ').lower()
        if not valid_upi_id(upi_id):
            self._say('Invalid UPI ID format.')
            return
        if self.ledger.has_account(upi_id):
            self._say('UPI ID already exists. Try login or choose another UPI ID.')
            return

        pin = self._ask('Set 4-digit PIN: ')
        if not valid_pin(pin):
            self._say('PIN must be exactly 4 digits.')
            return

        try:
            self.ledger.create_account(upi_id, name, pin)
        except DuplicateAccountError:
            self._say('UPI ID already exists. Try login or choose another UPI ID.')
        except InvalidAccountIdError:
            self._say('Invalid UPI ID format.')
        else:
            self._say('Registered successfully. You can now login.')

    def login(self):
        upi_id = self._ask('Enter UPI ID: ').lower()
        if not self.ledger.has_account(upi_id):
            self._say('No account found for this UPI ID.')
            return
        pin = self._ask('Enter PIN: ')
        try:
            account = self.ledger.authenticate(upi_id, pin)
        except AccountNotFoundError:
            self._say('No account found for this UPI ID.')
        except InvalidCredentialError:
            self._say('Incorrect PIN.')
        else:
            self.current_id = account.id
            self.current_name = account.display_name
            self._say(f'Login successful. Welcome, {account.display_name}!')

    def view_balance(self):
        balance = self.ledger.get_balance(self.current_id)
        self._say(f'Your balance: {self._money(balance)}')

    def add_money(self):
        amount = parse_amount(self._ask(f'Enter amount to add ({self.settings.currency_symbol}): '))
        if amount is None:
            self._say('Invalid amount.')
            return
        if amount <= 0:
            self._say('Amount must be positive.')
            return
        try:
            balance = self.ledger.deposit(self.current_id, amount)
        except InvalidAmountError:
            self._say('Invalid amount.')
        else:
            self._say(f'{self._money(amount)} added. New balance: {self._money(balance)}')

    def send_money(self):
        destination = self._ask('Enter recipient UPI ID: ').lower()
        if destination == self.current_id:
            self._say('Cannot send to yourself.')
            return
        if not self.ledger.has_account(destination):
            self._say('Recipient not found.')
            return

        amount = parse_amount(self._ask(f'Enter amount to send ({self.settings.currency_symbol}): '))
        if amount is None:
            self._say('Invalid amount.')
            return
        if amount <= 0:
            self._say('Amount must be positive.')
            return
        if amount > self.ledger.get_balance(self.current_id):
            self._say('Insufficient balance.')
            return

        pin = self._ask('Enter your 4-digit PIN to confirm: ')
        try:
            receipt = self.ledger.transfer(self.current_id, destination, amount, pin)
        except SelfTransferError:
            self._say('Cannot send to yourself.')
        except AccountNotFoundError:
            self._say('Recipient not found.')
        except InvalidAmountError:
            self._say('Invalid amount.')
        except InsufficientBalanceError:
            self._say('Insufficient balance.')
        except InvalidCredentialError:
            self._say('Incorrect PIN. Transaction cancelled.')
        else:
            self._say(f'Transaction successful. Sent {self._money(receipt.amount)} '
                      f'to {receipt.destination_id}')
            self._say(f'Your new balance: {self._money(receipt.source_balance)}')

    def show_history(self):
        self._say('=== Transaction History ===')
        entries = self.ledger.history(self.current_id, self.settings.history_limit)
        if not entries:
            self._say('No transactions yet.')
            return
        rows = [
            [entry.timestamp.strftime('%Y-%m-%d %H:%M:%S'), self._describe(entry)]
            for entry in entries
        ]
        self._say(tabulate(rows, headers=['Time', 'Details'], stralign='left'))

    def _describe(self, entry):
        if entry.amount is None:
            return entry.description
        amount = self._money(entry.amount)
        if entry.kind == ENTRY_DEPOSIT:
            return f'Added {amount} to wallet'
        if entry.kind == ENTRY_SENT:
            return f'Sent {amount} to {entry.counterparty}'
        if entry.kind == ENTRY_RECEIVED:
            return f'Received {amount} from {entry.counterparty}'
        return entry.description

    def logout(self):
        self._say(f'Logged out: {self.current_name}')
        logger.info('Session closed for %s', self.current_id)
        self.current_id = None
        self.current_name = None
