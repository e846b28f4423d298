# govstock/services/prompts.py
"""Prompt templates for the two enrichment queries. Pure string builders."""

LIKELIHOOD_TEMPLATE = """
Given the full bill text PDF at: {pdf_url}
and the legislative history below:
{history_text}

Assess the likelihood of this bill being passed by Congress. Provide a single integer percentage value between 1 and 99 inclusive, without any explanatory text or decimals.
"""

STOCKS_TEMPLATE = """
Given the same bill with PDF at: {pdf_url}
and its legislative history:
{history_text}

Identify the stocks most likely to be affected by the passage of this bill. Return a JSON array of objects with fields:
- symbol: stock ticker symbol
- impact: true if the stock is expected to go up, false if expected to go down

Example:
[
  {{ "symbol": "AAPL", "impact": true }},
  {{ "symbol": "T", "impact": false }}
]
Only include the JSON array in your response.
"""


def build_likelihood_prompt(pdf_url: str, history_text: str) -> str:
    return LIKELIHOOD_TEMPLATE.format(pdf_url=pdf_url, history_text=history_text)

def build_stocks_prompt(pdf_url: str, history_text: str) -> str:
    return STOCKS_TEMPLATE.format(pdf_url=pdf_url, history_text=history_text)
