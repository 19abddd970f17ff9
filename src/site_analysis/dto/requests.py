"""Request-side types for API endpoints."""

from enum import Enum


class DNSRecordType(str, Enum):
    """DNS record types accepted by the DNS check, with their wire numbers."""

    A = "A"
    AAAA = "AAAA"
    MX = "MX"
    TXT = "TXT"
    NS = "NS"
    CNAME = "CNAME"
    SOA = "SOA"

    @property
    def number(self) -> int:
        return DNS_TYPE_NUMBERS[self.value]

    @classmethod
    def from_number(cls, number: int) -> str:
        """Map a numeric record type back to its mnemonic, or ``UNKNOWN``."""
        return DNS_TYPE_NAMES.get(number, "UNKNOWN")


DNS_TYPE_NUMBERS: dict[str, int] = {
    "A": 1,
    "AAAA": 28,
    "MX": 15,
    "TXT": 16,
    "NS": 2,
    "CNAME": 5,
    "SOA": 6,
}

DNS_TYPE_NAMES: dict[int, str] = {number: name for name, number in DNS_TYPE_NUMBERS.items()}
