from .pipeline import extract_ticket, process_ticket_text

__all__ = ["extract_ticket", "process_ticket_text"]
