"""hauktui - copy-in terminal UI components and the CLI that vendors them."""

__version__ = "0.1.0"
