"""FaceFortune: AI face reading service."""

__version__ = "0.1.0"
