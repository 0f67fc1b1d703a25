import asyncio
import logging

from pairing_relay.ui.cli import RelayChatCLI
from pairing_relay.utils.config import get_relay_url


def main():
    logging.basicConfig(level=logging.WARNING, format='%(asctime)s - %(message)s')
    cli = RelayChatCLI(get_relay_url())
    try:
        asyncio.run(cli.run())
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"Fatal Error: {e}")


if __name__ == "__main__":
    main()
