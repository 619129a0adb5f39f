"""
Correlation text carried through the payment provider.

The provider's webhook has no structured field mapping back to our billing
ids, so the invoice's free-text description carries them:

    "1372,67 (DocumentID: monthly-a, monthly-b)"

Only the part before the first space is read back. Issuer and reconciler
talk to the CorrelationCodec protocol, so a provider-side metadata field
can replace this text format without touching either of them.
"""

from typing import List, Optional, Protocol, Sequence

from app.core.exceptions import ParseError

NO_DOCUMENT_IDS = "N/A"
# billings.id is a 32-bit INTEGER column
MAX_BILLING_ID = 2**31 - 1


class CorrelationCodec(Protocol):
    def encode(self, billing_ids: Sequence[int], document_ids: Optional[Sequence[str]] = None) -> str:
        ...

    def decode(self, text: str) -> List[int]:
        ...


class DescriptionCorrelationCodec:
    """Comma-separated ids followed by a human-readable DocumentID suffix."""

    def encode(self, billing_ids: Sequence[int], document_ids: Optional[Sequence[str]] = None) -> str:
        if not billing_ids:
            raise ValueError("at least one billing id is required")
        ids_part = ",".join(str(int(billing_id)) for billing_id in billing_ids)
        docs = [doc for doc in (document_ids or []) if doc]
        docs_part = ", ".join(docs) if docs else NO_DOCUMENT_IDS
        return f"{ids_part} (DocumentID: {docs_part})"

    def decode(self, text: str) -> List[int]:
        if text is None:
            raise ParseError("Correlation text is missing")

        head = text.strip().split(" ", 1)[0]
        if not head:
            raise ParseError("Correlation text carries no billing ids", {"text": text})

        ids: List[int] = []
        for token in head.split(","):
            token = token.strip()
            # isdecimal() rejects signs, blanks and unicode superscripts
            if not token.isdecimal() or not token.isascii():
                raise ParseError(
                    f"Invalid billing id {token!r} in correlation text",
                    {"text": text},
                )
            billing_id = int(token)
            if billing_id > MAX_BILLING_ID:
                raise ParseError(
                    f"Billing id {token} out of range in correlation text",
                    {"text": text},
                )
            ids.append(billing_id)
        return ids


default_codec = DescriptionCorrelationCodec()
