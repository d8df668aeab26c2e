from .findings_parser import FindingsReportParser, print_distribution

__all__ = ["FindingsReportParser", "print_distribution"]
