"""Gemini vision client for reading receipt details off cheque images"""

import base64
import json
from typing import Any, Dict

import httpx

from tradebill.config import settings
from tradebill.domain.exceptions import ChequeExtractionError
from tradebill.domain.models import ChequeData
from tradebill.infrastructure.observability.metrics import cheque_scan_counter, cheque_scan_latency_histogram

_PROMPT = """\
Analyze the provided cheque image and extract the information. Adhere to the following instructions precisely for each field:
- partyName: Find the label "For" or "FOR" and extract the full name of the payee written next to it.
- companyName: Find the label "Pay" or "PAY" and extract the full name of the company written next to it.
- date: Find the date on the cheque and provide it in DD/MM/YYYY format.
- amount: Extract only the numerical value of the cheque amount.
- chequeNumber: Extract the cheque number.
- bankName: Extract the name of the bank.

Return the data as a JSON object with exactly these keys. If a field is not found or is unclear, return an empty string for that field.
"""

# Response keys -> ChequeData attributes
_FIELD_MAP = {
    "partyName": "party_name",
    "companyName": "company_name",
    "date": "date",
    "amount": "amount",
    "chequeNumber": "cheque_number",
    "bankName": "bank_name",
}


class ChequeScanner:
    """Client for the Gemini generateContent API"""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model = model or settings.gemini_model
        self.base_url = base_url or settings.gemini_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self._transport = transport

    async def extract(self, image: bytes, mime_type: str = "image/jpeg") -> ChequeData:
        """
        Read party, company, date, amount, cheque number and bank off a cheque.

        Raises:
            ChequeExtractionError: Missing/invalid API key, timeout, HTTP errors,
                or a response that is not the expected JSON object
        """
        if not self.api_key:
            cheque_scan_counter.labels(outcome="not_configured").inc()
            raise ChequeExtractionError(
                "Gemini API key is not configured. Set GEMINI_API_KEY in the environment."
            )

        body = {
            "contents": [
                {
                    "parts": [
                        {"inline_data": {"mime_type": mime_type, "data": base64.b64encode(image).decode("ascii")}},
                        {"text": _PROMPT},
                    ]
                }
            ],
            "generationConfig": {"responseMimeType": "application/json"},
        }

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                with cheque_scan_latency_histogram.time():
                    response = await client.post(
                        f"{self.base_url}/models/{self.model}:generateContent",
                        headers={"x-goog-api-key": self.api_key},
                        json=body,
                    )
                response.raise_for_status()
                cheque = parse_cheque_response(response.json())

            except httpx.TimeoutException as e:
                cheque_scan_counter.labels(outcome="timeout").inc()
                raise ChequeExtractionError(f"Scan failed: no response after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                cheque_scan_counter.labels(outcome="http_error").inc()
                raise ChequeExtractionError(_describe_http_error(e.response)) from e
            except httpx.RequestError as e:
                cheque_scan_counter.labels(outcome="network_error").inc()
                raise ChequeExtractionError(f"Scan failed: {e}") from e
            except (KeyError, IndexError, TypeError, ValueError) as e:
                cheque_scan_counter.labels(outcome="invalid_response").inc()
                raise ChequeExtractionError(f"Scan failed: unreadable response ({e})") from e

        cheque_scan_counter.labels(outcome="success").inc()
        return cheque


def _describe_http_error(response: httpx.Response) -> str:
    """Turn a Gemini error body into an operator-facing message"""
    try:
        message = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        message = f"HTTP {response.status_code}"

    if "API key not valid" in message:
        return "Scan failed: The provided API Key is not valid. Please check your settings."
    if "permission" in message.lower() or response.status_code == 403:
        return (
            "Scan failed: The provided API Key is not valid or does not have "
            "permissions for this model. Please check your settings."
        )
    return f"Scan failed: {message}"


def _strip_code_fence(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = [line for line in lines[1:] if not line.strip().startswith("```")]
        cleaned = "\n".join(lines)
    return cleaned


def parse_cheque_response(payload: Dict[str, Any]) -> ChequeData:
    """Pull the JSON object out of the first candidate's text part"""
    text = payload["candidates"][0]["content"]["parts"][0]["text"]
    data = json.loads(_strip_code_fence(text))
    if not isinstance(data, dict):
        raise ValueError("expected a JSON object")

    values = {}
    for key, attr in _FIELD_MAP.items():
        value = data.get(key)
        values[attr] = "" if value is None else str(value).strip()
    return ChequeData(**values)
