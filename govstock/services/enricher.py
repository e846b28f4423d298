# govstock/services/enricher.py
"""
The bill enrichment pipeline: two model queries per record, parsed into an
EnrichedBill.

Malformed model output degrades one field of one row. Any error raised by
the query client aborts the whole batch; there is no partial result.
"""
import asyncio
import logging
import os
from typing import List, Sequence

from govstock.models import BillRecord, EnrichedBill
from .llm_groq import QueryClient
from .parser import parse_likelihood, parse_stocks
from .prompts import build_likelihood_prompt, build_stocks_prompt

logger = logging.getLogger(__name__)


async def enrich_one(record: BillRecord, client: QueryClient) -> EnrichedBill:
    # 1) passage likelihood
    raw = await client.generate(build_likelihood_prompt(record.pdf_url, record.history_text))
    likelihood = parse_likelihood(raw)

    # 2) impacted stocks
    raw = await client.generate(build_stocks_prompt(record.pdf_url, record.history_text))
    stocks = parse_stocks(raw)

    logger.debug("Row %d (%s): likelihood=%s stocks=%d", record.row, record.name, likelihood, len(stocks))
    return EnrichedBill(**record.model_dump(), row=record.row, likelihood=likelihood, stocks=stocks)


async def enrich(
    records: Sequence[BillRecord],
    client: QueryClient,
    concurrency: int | None = None,
) -> List[EnrichedBill]:
    """
    Enrich records in input order.

    concurrency=1 processes rows strictly one after another. Higher values
    run up to that many rows at once; output order is still input order and
    the first failure cancels the rows still in flight.
    """
    limit = max(1, concurrency or int(os.getenv("ENRICH_CONCURRENCY", "1")))
    logger.info("Enriching %d bills (concurrency=%d)", len(records), limit)

    if limit == 1:
        return [await enrich_one(r, client) for r in records]

    sem = asyncio.Semaphore(limit)

    async def _bounded(record: BillRecord) -> EnrichedBill:
        async with sem:
            return await enrich_one(record, client)

    tasks = [asyncio.ensure_future(_bounded(r)) for r in records]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for t in tasks:
            t.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
