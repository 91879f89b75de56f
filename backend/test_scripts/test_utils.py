"""
FamilyFolio test output helpers.

Shared section/success/info printers so that `pytest -s` runs of the API
suites read as a narrated walkthrough.
"""


class Colors:
    """ANSI color codes for terminal output."""
    GREEN = '\033[0;32m'
    BLUE = '\033[0;34m'
    CYAN = '\033[0;36m'
    NC = '\033[0m'  # No Color


def print_section(title: str):
    """Print a formatted section header."""
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print('=' * 60)


def print_success(message: str):
    """Print a success message with green checkmark."""
    print(f"{Colors.GREEN}✅ {message}{Colors.NC}")


def print_info(message: str):
    """Print an info message with blue info symbol."""
    print(f"{Colors.BLUE}ℹ️  {message}{Colors.NC}")
