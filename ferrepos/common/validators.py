"""
Validadores específicos para Paraguay (RUC y teléfonos)
"""
import re
from typing import Optional, Tuple


def compute_check_digit(base_number: Optional[str]) -> Optional[int]:
    """
    Calcula el dígito verificador (DV) de un RUC paraguayo, módulo 11.

    Se descartan los caracteres no numéricos. Recorriendo los dígitos de
    derecha a izquierda, cada uno se multiplica por un peso creciente que
    arranca en 2 (2, 3, 4, ... sin límite). Con la suma:
    - resto = suma % 11
    - dv = 11 - resto
    - 11 pasa a 0 y 10 pasa a 1

    Returns:
        El dígito (0-9), o None si no quedan dígitos para calcular.
    """
    if not base_number:
        return None

    digits = re.sub(r'\D', '', base_number)
    if not digits:
        return None

    total = 0
    for weight, digit in enumerate(reversed(digits), start=2):
        total += int(digit) * weight

    dv = 11 - (total % 11)
    if dv == 11:
        dv = 0
    elif dv == 10:
        dv = 1
    return dv


def format_ruc(base_number: Optional[str]) -> str:
    """
    Formatea un RUC completo "XXXXXXX-D" a partir del número base.
    Retorna cadena vacía si el número base no tiene dígitos.
    """
    dv = compute_check_digit(base_number)
    if dv is None:
        return ""
    digits = re.sub(r'\D', '', base_number)
    return f"{digits}-{dv}"


def split_ruc(ruc: str) -> Tuple[str, Optional[str]]:
    """Separa "1234567-9" en ("1234567", "9"). Sin guión el DV es None."""
    cleaned = re.sub(r'[\s\.]', '', ruc or "")
    if '-' not in cleaned:
        return re.sub(r'\D', '', cleaned), None
    base, dv = cleaned.rsplit('-', 1)
    return re.sub(r'\D', '', base), dv


def validate_ruc(ruc: str) -> bool:
    """Valida un RUC con DV ("80069563-1")."""
    base, dv = split_ruc(ruc)
    if not base or dv is None or not dv.isdigit():
        return False
    return compute_check_digit(base) == int(dv)


def validate_paraguay_phone(phone: str) -> bool:
    """
    Valida número de teléfono paraguayo.
    Formatos válidos:
    - +5959XXXXXXXX / 5959XXXXXXXX (móvil internacional)
    - 09XXXXXXXX (móvil local, 10 dígitos)
    - +595XXXXXXXX (fijo internacional)
    - 0XXXXXXX a 0XXXXXXXXX (fijo local con prefijo de ciudad)
    """
    cleaned = re.sub(r'[\s\-\(\)]', '', phone)

    patterns = [
        r'^\+5959[0-9]{8}$',
        r'^5959[0-9]{8}$',
        r'^09[0-9]{8}$',
        r'^\+595[1-8][0-9]{6,8}$',
        r'^0[1-8][0-9]{6,8}$',
    ]

    return any(re.match(pattern, cleaned) for pattern in patterns)


def format_paraguay_phone(phone: str) -> str:
    """
    Normaliza un teléfono paraguayo al formato internacional +595XXXXXXXXX
    """
    if not validate_paraguay_phone(phone):
        return phone  # Retorna sin cambios si no es válido

    cleaned = re.sub(r'[\s\-\(\)]', '', phone)

    if cleaned.startswith('+595'):
        return cleaned
    elif cleaned.startswith('595'):
        return '+' + cleaned
    elif cleaned.startswith('0'):
        return '+595' + cleaned[1:]

    return phone
