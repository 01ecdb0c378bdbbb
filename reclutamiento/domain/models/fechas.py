# RUTA: reclutamiento/domain/models/fechas.py
"""
Conversión de fechas entre el modelo y el formato de intercambio (ISO-8601).
Las fechas viajan como texto en los respaldos y se rehidratan al cargar.
"""

from datetime import date, datetime


def a_iso(valor):
    if valor is None:
        return None
    return valor.isoformat()


def _parsear(texto):
    texto = texto.strip()
    if texto.endswith('Z'):
        texto = texto[:-1] + '+00:00'
    momento = datetime.fromisoformat(texto)
    if momento.tzinfo is not None:
        # Se trabaja con horas locales sin zona
        momento = momento.astimezone().replace(tzinfo=None)
    return momento


def a_datetime(valor):
    """Convierte texto ISO, date o datetime en datetime. Devuelve None si no hay valor."""
    if valor is None or valor == '':
        return None
    if isinstance(valor, datetime):
        return valor
    if isinstance(valor, date):
        return datetime(valor.year, valor.month, valor.day)
    return _parsear(str(valor))


def a_fecha(valor):
    """Convierte texto ISO, date o datetime en date. Devuelve None si no hay valor."""
    if valor is None or valor == '':
        return None
    if isinstance(valor, datetime):
        return valor.date()
    if isinstance(valor, date):
        return valor
    return _parsear(str(valor)).date()


def a_fecha_o_none(valor):
    """Igual que a_fecha, pero un texto ilegible se interpreta como 'sin fecha'."""
    try:
        return a_fecha(valor)
    except (TypeError, ValueError):
        return None
