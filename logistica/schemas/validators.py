"""
Logistica Server - Validadores de formato
Placas, documentos (CPF/CNPJ) e datas usados pelos schemas
"""
import re
from datetime import date
from typing import Any, Optional

PLACA_RE = re.compile(r"^[A-Z]{3}-?(?:\d{4}|\d[A-Z]\d{2})$", re.IGNORECASE)
DATA_ISO_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
DATA_BR_RE = re.compile(r"^(\d{2})-(\d{2})-(\d{4})$")


def validar_placa(value: Optional[str]) -> Optional[str]:
    """Placa antiga (ABC-1234) ou Mercosul (ABC1D23)"""
    if value is None:
        return value
    if not PLACA_RE.match(value):
        raise ValueError("Placa inválida")
    return value.upper()


def cpf_valido(cpf: str) -> bool:
    """Valida dígitos verificadores do CPF"""
    if len(cpf) != 11 or cpf == cpf[0] * 11:
        return False

    def calc_digit(cpf, factor):
        total = sum(int(digit) * (factor - i) for i, digit in enumerate(cpf[:factor - 1]))
        remainder = total % 11
        return 0 if remainder < 2 else 11 - remainder

    return calc_digit(cpf, 10) == int(cpf[9]) and calc_digit(cpf, 11) == int(cpf[10])


def validar_documento(value: Optional[str]) -> Optional[str]:
    """CPF (11) ou CNPJ (14) já normalizado para dígitos"""
    if value is None:
        return value
    if len(value) not in (11, 14):
        raise ValueError("Documento deve ter 11 dígitos (CPF) ou 14 dígitos (CNPJ)")
    if value == value[0] * len(value):
        raise ValueError("Documento inválido (CPF/CNPJ)")
    if len(value) == 11 and not cpf_valido(value):
        raise ValueError("CPF inválido")
    return value


def normalizar_data(value: Any) -> Any:
    """Aceita YYYY-MM-DD ou DD-MM-YYYY; devolve ISO para o pydantic converter"""
    if isinstance(value, date) or not isinstance(value, str):
        return value

    texto = value.strip()
    if DATA_ISO_RE.match(texto):
        return texto

    br = DATA_BR_RE.match(texto)
    if br:
        dia, mes, ano = br.groups()
        return f"{ano}-{mes}-{dia}"

    raise ValueError("Data deve estar no formato DD-MM-YYYY ou YYYY-MM-DD")
