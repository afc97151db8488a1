import re
from typing import Union


def parse_amount(s: Union[str, float, int, None]) -> Union[float, None]:
    """Converte o valor digitado no formulário para float.
    Ex: "1200" -> 1200.0
    Ex: "1200,50" -> 1200.5
    Ex: "1.200,50" -> 1200.5 (ponto como separador de milhar)
    Ex: "1.200" -> 1200.0 (grupos de três dígitos: milhar, não decimal)
    Ex: "12.50" -> 12.5
    Ex: "" -> None
    """
    if s is None:
        return None
    if isinstance(s, (int, float)):
        return float(s)

    text = s.strip().replace("R$", "").replace(" ", "")
    if not text:
        return None

    if "," in text:
        # Formato brasileiro: pontos são milhares, vírgula é decimal
        text = text.replace(".", "").replace(",", ".")
    elif re.fullmatch(r"-?\d{1,3}(\.\d{3})+", text):
        text = text.replace(".", "")

    if not re.fullmatch(r"-?\d+(\.\d+)?", text):
        return None
    return float(text)


def format_brl(value: Union[float, None]) -> str:
    """Formata um valor em reais. Ex: 1234.5 -> "R$ 1.234,50"."""
    if value is None:
        value = 0.0
    s = f"{value:,.2f}"
    s = s.replace(",", "X").replace(".", ",").replace("X", ".")
    return f"R$ {s}"


def parse_int(s: Union[str, int, None], default: Union[int, None] = None) -> Union[int, None]:
    """Converte um campo inteiro do formulário; devolve `default` se vier vazio ou inválido."""
    if s is None:
        return default
    if isinstance(s, int):
        return s
    text = s.strip()
    if not text.lstrip("-").isdigit():
        return default
    return int(text)
