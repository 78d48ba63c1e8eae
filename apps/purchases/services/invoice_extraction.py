"""
Invoice extraction boundary.

An invoice image is sent to a vision model behind an OpenAI-compatible chat
completions endpoint. Its reply is an untrusted suggestion: it goes through
the same validation as manually entered data before anything is saved, and
a reply that cannot be parsed is returned to the caller as-is. Calls are
never retried.
"""

import json
import logging
import re
from decimal import Decimal

import httpx
from django.conf import settings
from rest_framework import serializers

from apps.common.money import line_total, sum_money
from apps.purchases.serializers import LineItemInputSerializer, PurchaseInputSerializer
from apps.suppliers.services import match_supplier_name

from .exceptions import InvoiceExtractionError

logger = logging.getLogger(__name__)

MONEY_FIELD = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal('0.00'))

EXTRACTION_PROMPT = """Analyze this invoice/receipt image and extract the following information in JSON format:

{
  "date": "YYYY-MM-DD format or null if not found",
  "supplierName": "Name of the vendor/supplier",
  "supplierAddress": "Address if visible, or null",
  "invoiceNumber": "Invoice/receipt number if visible, or null",
  "lineItems": [
    {
      "description": "Item description",
      "brand": "Brand name if visible, or null",
      "quantity": 1,
      "unitPrice": 0.00,
      "totalPrice": 0.00
    }
  ],
  "subtotal": 0.00,
  "tax": 0.00,
  "totalAmount": 0.00,
  "currency": "EUR or detected currency code",
  "paymentMethod": "Payment method if visible, or null",
  "notes": "Any additional relevant information"
}

Important:
- Extract all visible line items
- Amounts should be numbers without currency symbols
- If a value cannot be determined, use null
- Ensure dates are in YYYY-MM-DD format

Return ONLY valid JSON, no additional text."""

# The model sometimes wraps the object in prose or a markdown fence
JSON_OBJECT = re.compile(r'\{.*\}', re.DOTALL)


def parse_extraction_reply(text: str) -> dict:
    """
    Pull the JSON object out of a model reply.

    Raises:
        InvoiceExtractionError: If no JSON object can be parsed; carries the
            raw reply
    """
    match = JSON_OBJECT.search(text or '')
    candidate = match.group(0) if match else text
    try:
        data = json.loads(candidate)
    except (TypeError, ValueError):
        logger.error('Failed to parse invoice extraction reply: %r', (text or '')[:500])
        raise InvoiceExtractionError(detail='Failed to parse invoice data', raw_response=text)

    if not isinstance(data, dict):
        raise InvoiceExtractionError(detail='Failed to parse invoice data', raw_response=text)
    return data


def extract_invoice(*, image_base64: str, mime_type: str = 'image/jpeg') -> dict:
    """
    Ask the vision model to read an invoice image.

    Args:
        image_base64: Base64-encoded image (or PDF) bytes
        mime_type: MIME type of the encoded file

    Returns:
        dict: The model's suggestion (camelCase keys, unvalidated)

    Raises:
        InvoiceExtractionError: If the service is unreachable, answers with an
            error status, or replies with something that is not JSON
    """
    payload = {
        'model': settings.INVOICE_EXTRACTION_MODEL,
        'max_tokens': 4096,
        'temperature': 0.1,
        'messages': [
            {
                'role': 'user',
                'content': [
                    {'type': 'image_url', 'image_url': {'url': f'data:{mime_type};base64,{image_base64}'}},
                    {'type': 'text', 'text': EXTRACTION_PROMPT},
                ],
            }
        ],
    }
    headers = {'Authorization': f'Bearer {settings.INVOICE_EXTRACTION_API_KEY}'}

    try:
        response = httpx.post(
            settings.INVOICE_EXTRACTION_API_URL,
            json=payload,
            headers=headers,
            timeout=settings.INVOICE_EXTRACTION_TIMEOUT,
        )
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        logger.error('Invoice extraction service returned %s', exc.response.status_code)
        raise InvoiceExtractionError(
            detail='Invoice extraction service returned an error',
            raw_response=exc.response.text,
        ) from exc
    except httpx.HTTPError as exc:
        logger.error('Invoice extraction service unreachable', exc_info=True)
        raise InvoiceExtractionError(detail='Invoice extraction service is unavailable') from exc

    try:
        content = response.json()['choices'][0]['message']['content']
    except (ValueError, KeyError, IndexError, TypeError) as exc:
        logger.error('Unexpected invoice extraction response shape')
        raise InvoiceExtractionError(
            detail='Unexpected response from invoice extraction service',
            raw_response=response.text,
        ) from exc

    data = parse_extraction_reply(content)
    logger.info('Invoice extracted: %d line item(s)', len(data.get('lineItems') or []))
    return data


def _line_item_payload(raw: dict) -> dict:
    quantity = raw.get('quantity')
    return {
        'description': raw.get('description') or '',
        'brand': raw.get('brand') or '',
        'quantity': 1 if quantity is None else quantity,
        'unit_price': raw.get('unitPrice'),
    }


def validate_extracted_invoice(data: dict):
    """
    Run an extracted invoice through the manual-entry validation rules.

    Nothing is persisted. Fields that pass are returned in ``cleaned`` with
    the purchase input field names; fields that fail are reported in
    ``errors`` and left out of ``cleaned`` so the user can correct them.

    Args:
        data: The raw suggestion from ``extract_invoice``

    Returns:
        tuple: (cleaned, errors, supplier_suggestions) where suggestions are
            ``{'id', 'display_name', 'score'}`` dicts for existing suppliers
            resembling ``supplierName``
    """
    cleaned = {}
    errors = {}

    scalar = PurchaseInputSerializer().fields
    for field, key in (('date', 'date'), ('currency', 'currency')):
        value = data.get(key)
        if value in (None, ''):
            continue
        try:
            cleaned[field] = scalar[field].run_validation(value)
        except serializers.ValidationError as exc:
            errors[field] = exc.detail
    if 'currency' in cleaned:
        cleaned['currency'] = cleaned['currency'].upper()

    for field, key in (('subtotal', 'subtotal'), ('tax', 'tax'), ('total_amount', 'totalAmount')):
        value = data.get(key)
        if value is None:
            continue
        try:
            cleaned[field] = MONEY_FIELD.run_validation(value)
        except serializers.ValidationError as exc:
            errors[field] = exc.detail

    raw_items = data.get('lineItems') or []
    if not isinstance(raw_items, list):
        errors['line_items'] = ['Expected a list of line items.']
        raw_items = []

    items = []
    item_errors = {}
    for index, raw in enumerate(raw_items):
        if not isinstance(raw, dict):
            item_errors[index] = ['Line item must be an object.']
            continue
        serializer = LineItemInputSerializer(data=_line_item_payload(raw))
        if serializer.is_valid():
            item = serializer.validated_data
            items.append({field: item[field] for field in ('description', 'brand', 'quantity', 'unit_price')})
        else:
            item_errors[index] = serializer.errors
    if item_errors:
        errors['line_items'] = item_errors
    cleaned['line_items'] = items

    if items and not item_errors and 'subtotal' in cleaned:
        computed = sum_money(line_total(i['quantity'], i['unit_price']) for i in items)
        if computed != cleaned['subtotal']:
            errors['subtotal'] = [f'Line items add up to {computed}, not {cleaned["subtotal"]}.']

    supplier_name = str(data.get('supplierName') or '').strip()
    suggestions = []
    if supplier_name:
        cleaned['supplier_name'] = supplier_name
        suggestions = [
            {'id': supplier.id, 'display_name': supplier.display_name, 'score': score}
            for supplier, score in match_supplier_name(name=supplier_name)
        ]

    return cleaned, errors, suggestions
