"""Submission validation (core domain)."""

from __future__ import annotations

import re

from sosfeed.core.categories import is_known_category
from sosfeed.core.models import DraftSubmission, FieldErrors

MIN_CONTENT_CHARS = 10

PHONE_PATTERN = re.compile(r"\(\d{2}\) \d{4,5}-\d{4}", re.ASCII)
CEP_PATTERN = re.compile(r"\d{5}-?\d{3}", re.ASCII)


def validate_submission(draft: DraftSubmission) -> FieldErrors:
    """Return every failing field of ``draft`` mapped to its message.

    Rules are independent, so all failing fields report at once. The
    neighborhood, city and state fields are never validated because they
    may be auto-filled or legitimately blank.
    """

    errors: FieldErrors = {}

    if not draft.name.strip():
        errors["name"] = "Nome é obrigatório"

    content = draft.content.strip()
    if not content:
        errors["content"] = "Descrição da situação é obrigatória"
    elif len(content) < MIN_CONTENT_CHARS:
        errors["content"] = f"Descrição deve ter pelo menos {MIN_CONTENT_CHARS} caracteres"

    if not draft.category:
        errors["category"] = "Categoria é obrigatória"
    elif not is_known_category(draft.category):
        errors["category"] = "Categoria inválida"

    if not draft.phone.strip():
        errors["phone"] = "Telefone é obrigatório"
    elif not PHONE_PATTERN.fullmatch(draft.phone):
        errors["phone"] = "Telefone deve estar no formato (11) 99999-9999"

    if not draft.cep.strip():
        errors["cep"] = "CEP é obrigatório"
    elif not CEP_PATTERN.fullmatch(draft.cep):
        errors["cep"] = "CEP deve estar no formato 00000-000"

    if not draft.address.strip():
        errors["address"] = "Endereço é obrigatório"

    if not draft.number.strip():
        errors["number"] = "Número é obrigatório"

    return errors
