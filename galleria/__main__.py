"""main module"""

import asyncio
import sys

from galleria.cli import main_menu


async def main():
    """
    The main function that runs the program.
    """
    try:
        await main_menu()
    except (KeyboardInterrupt, EOFError):
        print("\n[!] Exiting...")
        sys.exit(0)


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
