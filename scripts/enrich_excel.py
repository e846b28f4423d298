# scripts/enrich_excel.py
"""
Run the bill enrichment pipeline on a local workbook, without the API.

Reads data/bills.xlsx (or $BILLS_XLSX), writes the rewritten workbook to
data/results.xlsx (or $RESULTS_XLSX) and the JSON payload next to it.
"""
import asyncio
import json
import os
from pathlib import Path

from dotenv import load_dotenv

from govstock.logger import setup_logging
from govstock.services.enricher import enrich
from govstock.services.llm_groq import GroqQueryClient
from govstock.services.rows import eligible_records
from govstock.services.sinks import JsonSink, SpreadsheetSink
from govstock.services.workbook import BillSheet

ROOT = Path(__file__).resolve().parents[1]
SRC = Path(os.environ.get("BILLS_XLSX", ROOT / "data" / "bills.xlsx"))
OUT = Path(os.environ.get("RESULTS_XLSX", ROOT / "data" / "results.xlsx"))

async def run():
    assert SRC.exists(), f"Missing {SRC}"
    sheet = BillSheet.from_bytes(SRC.read_bytes())
    records = eligible_records(sheet.rows())

    client = GroqQueryClient()
    try:
        results = await enrich(records, client)
    finally:
        await client.aclose()

    payload = JsonSink().write(sheet, results)
    OUT.parent.mkdir(parents=True, exist_ok=True)
    OUT.with_suffix(".json").write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    OUT.write_bytes(SpreadsheetSink().write(sheet, results))
    print(f"Enriched {len(results)} bills from {SRC} -> {OUT}")

def main():
    load_dotenv()
    setup_logging()
    asyncio.run(run())

if __name__ == "__main__":
    main()
