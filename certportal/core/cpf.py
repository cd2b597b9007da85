# certportal/core/cpf.py
"""
Normalização de CPF.

O CPF é só a chave de busca dos certificados: aceitamos qualquer máscara
(pontos, traço, espaços) e guardamos apenas os 11 dígitos. Não há
validação de dígitos verificadores; valores já gravados sem DV válido
continuam sendo aceitos.
"""
import re
from typing import Optional

CPF_LENGTH = 11
# só 0-9 ASCII: "\D" do Python aceita dígitos fullwidth, árabe-índicos etc.
_NON_DIGITS = re.compile(r"[^0-9]")


def only_digits(value: str) -> str:
    return _NON_DIGITS.sub("", value or "")


def normalize_cpf(value: Optional[str]) -> Optional[str]:
    """
    '123.456.789-01' -> '12345678901'
    Retorna None quando sobram mais ou menos que 11 dígitos.
    """
    if not isinstance(value, str):
        return None
    digits = only_digits(value)
    if len(digits) != CPF_LENGTH:
        return None
    return digits


def format_cpf(value: str) -> str:
    """Aplica a máscara 000.000.000-00 progressivamente (não valida)."""
    digits = only_digits(value)[:CPF_LENGTH]
    head = ".".join(part for part in (digits[:3], digits[3:6], digits[6:9]) if part)
    if len(digits) > 9:
        return f"{head}-{digits[9:]}"
    return head
