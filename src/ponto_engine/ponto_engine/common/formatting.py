from __future__ import annotations


def format_minutes(minutes: int) -> str:
    """Format an unsigned minute count as HH:MM (hours may exceed 24)."""
    minutes = abs(int(minutes))
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_balance(minutes: int) -> str:
    """Format a signed balance as +HH:MM / -HH:MM (zero is '+00:00')."""
    sign = "-" if minutes < 0 else "+"
    return f"{sign}{format_minutes(minutes)}"
