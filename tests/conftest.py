"""Shared test doubles: a scripted query client and in-memory workbooks."""

from __future__ import annotations

import io

import openpyxl
import pytest

from govstock.exceptions import TransportError


HEADER = ["Name", "Desc", "URL", "History"]
BILL = ["H.R. 1", "A bill", "http://x/doc.pdf", "passed committee"]
XOM_DOWN = '[{"symbol":"XOM","impact":false}]'


class FakeQueryClient:
    """
    Answers likelihood prompts and stocks prompts with fixed replies.
    Optionally raises TransportError on the Nth call (1-based).
    """

    def __init__(
        self,
        likelihood: str = "73",
        stocks: str = XOM_DOWN,
        fail_on_call: int | None = None,
    ) -> None:
        self.likelihood = likelihood
        self.stocks = stocks
        self.fail_on_call = fail_on_call
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.fail_on_call is not None and len(self.prompts) == self.fail_on_call:
            raise TransportError("connection reset by peer")
        if "likelihood of this bill" in prompt:
            return self.likelihood
        return self.stocks


def make_xlsx(rows: list[list]) -> bytes:
    wb = openpyxl.Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def fake_client() -> FakeQueryClient:
    return FakeQueryClient()


@pytest.fixture
def single_bill_xlsx() -> bytes:
    return make_xlsx([HEADER, BILL])


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    # a developer .env must not change test outcomes
    monkeypatch.delenv("LIKELIHOOD_CLAMP", raising=False)
    monkeypatch.delenv("ENRICH_CONCURRENCY", raising=False)
