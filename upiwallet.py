import logging
from dotenv import load_dotenv
from config.settings import Settings
from console.menu import WalletConsole
from upi_wallet.repositories.account_repo import AccountRepository
from upi_wallet.seeding import seed_sample_data
from upi_wallet.services.ledger_service import Ledger


def setup_logging(settings):
    handler = logging.FileHandler(filename=settings.log_path, encoding='utf-8', mode='a')
    handler.setFormatter(logging.Formatter('%(asctime)s:%(levelname)s:%(name)s: %(message)s'))
    for name in ('upi_wallet', 'console'):
        logger = logging.getLogger(name)
        logger.setLevel(settings.log_level)
        logger.addHandler(handler)


def main():
    load_dotenv()

    # Load settings from environment variables
    settings = Settings.load()
    setup_logging(settings)

    ledger = Ledger(
        AccountRepository(),
        history_limit=settings.history_limit,
        verify_credential_first=settings.verify_credential_first,
        max_amount=settings.max_amount,
    )
    if settings.seed_sample_data:
        seed_sample_data(ledger)
    WalletConsole(ledger, settings).run()


if __name__ == '__main__':
    main()
