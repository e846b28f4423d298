# govstock/services/rows.py
import logging
from typing import List, Sequence

from govstock.models import BillRecord
from .utils import as_str

logger = logging.getLogger(__name__)

# A name, B description, C pdfUrl, D historyText
COLUMNS = 4


def eligible_records(rows: Sequence[Sequence[object]]) -> List[BillRecord]:
    """
    Map decoded worksheet rows to BillRecords.

    Row 0 is the header and is always skipped. Rows without a PDF URL or
    legislative history are dropped without error.
    """
    out: List[BillRecord] = []
    for line, row in enumerate(rows[1:], start=2):
        cells = list(row or ())[:COLUMNS]
        cells += [None] * (COLUMNS - len(cells))
        name, description, pdf_url, history = (as_str(c) for c in cells)
        if not pdf_url or not history:
            logger.debug("Skipping row %d: missing pdf url or history", line)
            continue
        out.append(BillRecord(
            name=name,
            description=description,
            pdf_url=pdf_url,
            history_text=history,
            row=line,
        ))
    return out
