# RUTA: reclutamiento/application/services/respaldo_service.py

import io
import json
import logging
from datetime import date

logger = logging.getLogger(__name__)


class RespaldoService:
    """Genera la descarga de respaldo con todas las colecciones de la plataforma."""

    def __init__(self, almacen):
        self._almacen = almacen

    @staticmethod
    def nombre_archivo(hoy=None):
        hoy = hoy or date.today()
        return f"respaldo_plataforma_reclutamiento_{hoy.isoformat()}.json"

    def generar_respaldo(self, hoy=None):
        """
        Returns:
            (nombre_archivo, BytesIO con el JSON de la instantánea)
        """
        snapshot = self._almacen.to_snapshot()
        contenido = json.dumps(snapshot, ensure_ascii=False, indent=2).encode('utf-8')
        nombre = self.nombre_archivo(hoy)
        logger.info(f"Respaldo generado: {nombre} ({len(contenido)} bytes)")
        return nombre, io.BytesIO(contenido)
