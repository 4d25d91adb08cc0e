"""CLI output utilities and formatting."""

from datetime import datetime
from colorama import Fore, Style

BANNER = f"""
{Fore.YELLOW}┌──────────────────────────────────────────┐{Style.RESET_ALL}
{Fore.YELLOW}│{Style.RESET_ALL}  {Fore.CYAN}{Style.BRIGHT}pushup{Style.RESET_ALL}                                  {Fore.YELLOW}│{Style.RESET_ALL}
{Fore.YELLOW}│{Style.RESET_ALL}  {Fore.WHITE}A simple version control system{Style.RESET_ALL}         {Fore.YELLOW}│{Style.RESET_ALL}
{Fore.YELLOW}└──────────────────────────────────────────┘{Style.RESET_ALL}
"""


def success(message: str) -> str:
    """Format success message in green."""
    return f"{Fore.GREEN}✓ {message}{Style.RESET_ALL}"


def info(message: str) -> str:
    """Format info message in cyan."""
    return f"{Fore.CYAN}→ {message}{Style.RESET_ALL}"


def warning(message: str) -> str:
    """Format warning message in yellow."""
    return f"{Fore.YELLOW}⚠ {message}{Style.RESET_ALL}"


def error(message: str) -> str:
    """Format error message in red."""
    return f"{Fore.RED}✗ {message}{Style.RESET_ALL}"


def format_timestamp(timestamp: str) -> str:
    """Format an ISO-8601 commit timestamp as a readable local date."""
    try:
        dt = datetime.fromisoformat(timestamp.replace('Z', '+00:00'))
        return dt.astimezone().strftime("%a %b %d %H:%M:%S %Y %z")
    except (ValueError, AttributeError):
        return "Unknown date"


def short(digest: str) -> str:
    """Abbreviated digest for display."""
    return digest[:7] if digest else '(none)'
