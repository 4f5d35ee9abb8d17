"""
Nombre anunciado del runner.
"""

from .entities import VirtualMachine

# Mayor índice aceptado: el rango de un entero con signo de 64 bits
MAX_POOL_INDEX = 2**63 - 1


def is_pool_index(suffix: str) -> bool:
    """
    Indica si el sufijo es un índice de pool: dígitos ASCII con un "+"
    opcional delante, dentro del rango de un entero de 64 bits.
    """
    digits = suffix[1:] if suffix.startswith("+") else suffix
    if not digits or not (digits.isascii() and digits.isdigit()):
        return False
    return int(digits) <= MAX_POOL_INDEX


def resolve_runner_name(configured_name: str, virtual_machine: VirtualMachine) -> str:
    """
    Deriva el nombre del runner a partir del nombre configurado y de la VM.

    Sin nombre configurado se usa el nombre de la VM tal cual. Con nombre
    configurado se agrega el índice del pool ("baseVM-3" -> "<nombre> 3")
    cuando el sufijo tras el último "-" es numérico. El sufijo se copia
    sin normalizar ("baseVM-+7" -> "<nombre> +7").

    Args:
        configured_name: Nombre base configurado (puede estar vacío)
        virtual_machine: VM destino

    Returns:
        Nombre del runner
    """
    if not configured_name:
        return virtual_machine.name

    _, dash, index = virtual_machine.name.rpartition("-")
    if dash and is_pool_index(index):
        return f"{configured_name} {index}"

    return configured_name
