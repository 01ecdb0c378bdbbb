# RUTA: reclutamiento/application/services/importacion_service.py
"""
Importación masiva de trabajadores.

Recibe registros ya interpretados (el desempaquetado de archivos queda fuera):
campos del trabajador, una fecha de nacimiento opcional en texto y el mapa de documentos.
"""

import logging
from datetime import date

from reclutamiento.domain.exceptions import TransicionInvalidaError
from reclutamiento.domain.models.catalogos import DOCUMENTOS_IMPORTACION, DOCUMENTOS_OBLIGATORIOS, NO_DISPONIBLE
from reclutamiento.domain.models.enums import EstadoDocumental
from reclutamiento.domain.models.fechas import a_fecha_o_none
from reclutamiento.domain.models.trabajador import Trabajador

logger = logging.getLogger(__name__)

CAMPOS_TEXTO = ('nombre', 'especialidad', 'rut', 'ciudad', 'nacionalidad', 'telefono')


def presencia_documentos(registro):
    """{'cv': bool, 'cedula': bool, 'antecedentes': bool, 'certificado': bool}"""
    documentos = registro.get('documentos') or {}
    return {clave: bool(documentos.get(clave)) for clave in DOCUMENTOS_IMPORTACION}


def es_importable(registro):
    presencia = presencia_documentos(registro)
    return all(presencia[clave] for clave in DOCUMENTOS_OBLIGATORIOS)


def validar_registros(registros):
    if not isinstance(registros, list) or not all(isinstance(r, dict) for r in registros):
        raise TransicionInvalidaError("Los registros deben ser una lista de objetos.")
    if any(not isinstance(r.get('documentos') or {}, dict) for r in registros):
        raise TransicionInvalidaError("Los documentos de cada registro deben ser un objeto.")
    return registros


def calcular_edad(fecha_nacimiento, hoy=None):
    """Diferencia de años calendario. Sin fecha legible, la edad es 0."""
    nacimiento = a_fecha_o_none(fecha_nacimiento)
    if nacimiento is None:
        return 0
    hoy = hoy or date.today()
    return max(0, hoy.year - nacimiento.year)


class ImportacionService:
    def __init__(self, almacen):
        self._almacen = almacen

    def previsualizar(self, registros):
        """Indica por cada registro qué documentos trae y si puede importarse."""
        validar_registros(registros)
        vista = []
        for registro in registros:
            presencia = presencia_documentos(registro)
            vista.append({
                'nombre': registro.get('nombre') or NO_DISPONIBLE,
                'rut': registro.get('rut') or NO_DISPONIBLE,
                'documentos': presencia,
                'tiene_error': not es_importable(registro),
            })
        return vista

    def _construir(self, registros, hoy):
        ids = self._almacen.nuevos_ids('trab-imp', len(registros))
        max_numero = max([0] + [t.numero or 0 for t in self._almacen.trabajadores])
        nuevos = []
        for indice, registro in enumerate(registros):
            campos = {campo: (registro.get(campo) or NO_DISPONIBLE) for campo in CAMPOS_TEXTO}
            documentos = registro.get('documentos') or {}
            nuevos.append(Trabajador(
                id=ids[indice],
                numero=max_numero + indice + 1,
                edad=calcular_edad(registro.get('fechaNacimiento'), hoy),
                fecha_nacimiento=a_fecha_o_none(registro.get('fechaNacimiento')),
                estado_documental=EstadoDocumental.EN_REVISION,
                documentos={k: v for k, v in documentos.items() if k in DOCUMENTOS_IMPORTACION and v},
                es_prueba=False,
                **campos,
            ))
        return nuevos

    def importar(self, registros, hoy=None):
        """
        Agrega los registros que traen los documentos obligatorios.

        Returns:
            dict con los trabajadores creados y la cantidad de registros omitidos.
        """
        if not registros:
            raise TransicionInvalidaError("No hay registros para importar.")
        validar_registros(registros)
        validos = [r for r in registros if es_importable(r)]
        omitidos = len(registros) - len(validos)
        if not validos:
            raise TransicionInvalidaError("Ningún registro tiene los documentos obligatorios (CV, cédula y antecedentes).")

        nuevos = self._construir(validos, hoy)
        self._almacen.agregar_trabajadores(nuevos)
        logger.info(f"Importación masiva: {len(nuevos)} trabajadores creados, {omitidos} omitidos")
        return {'creados': nuevos, 'exitosos': len(nuevos), 'omitidos': omitidos}
