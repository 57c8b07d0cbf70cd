"""
Main entry point for the hackpack package.

When run as `python -m hackpack`, it behaves exactly like the
``hackpack`` console script.
"""

from hackpack.main import main

if __name__ == "__main__":
    main()
