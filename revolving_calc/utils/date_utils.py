"""Date manipulation utilities"""

from datetime import date


def format_date_dmy(day: date, sep: str = "/") -> str:
    """Format a date as dd/mm/yyyy (or dd.mm.yyyy with sep=".")"""
    return f"{day.day:02d}{sep}{day.month:02d}{sep}{day.year}"


def resolve_valid_date(valid_date: date | None, today: date | None = None) -> date:
    """Rate validity date, defaulting to today when the rules carry none"""
    if valid_date is not None:
        return valid_date
    return today or date.today()
