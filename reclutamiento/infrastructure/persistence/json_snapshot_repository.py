# RUTA: reclutamiento/infrastructure/persistence/json_snapshot_repository.py
"""
Repositorio de instantáneas en un archivo JSON local.
"""

import json
import logging
import os
from datetime import datetime

from reclutamiento.domain.repositories.i_snapshot_repository import ISnapshotRepository

logger = logging.getLogger(__name__)


class JsonSnapshotRepository(ISnapshotRepository):
    """
    Guarda la instantánea completa en un único archivo JSON.
    La escritura se hace sobre un archivo temporal que luego reemplaza al definitivo,
    así un fallo a mitad de escritura no deja el archivo corrupto.
    """

    def __init__(self, ruta_archivo):
        self._ruta = ruta_archivo

    @property
    def ruta(self):
        return self._ruta

    def cargar(self):
        """
        Lee la instantánea del disco.

        Un archivo que existe pero no contiene un objeto JSON se aparta como
        `<archivo>.corrupto-<marca>` para que los datos iniciales no lo sobrescriban.
        Los errores de lectura del sistema (OSError) se propagan.

        Returns:
            dict con las colecciones, o None si no hay instantánea utilizable.
        """
        if not os.path.exists(self._ruta):
            logger.info(f"No existe instantánea en {self._ruta}; se usarán los datos iniciales.")
            return None
        try:
            with open(self._ruta, 'r', encoding='utf-8') as archivo:
                snapshot = json.load(archivo)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self._apartar(e)
            return None
        if not isinstance(snapshot, dict):
            self._apartar("no es un objeto JSON")
            return None
        return snapshot

    def _apartar(self, motivo):
        ruta_apartada = f"{self._ruta}.corrupto-{datetime.now().strftime('%Y%m%d%H%M%S')}"
        os.replace(self._ruta, ruta_apartada)
        logger.error(f"Instantánea ilegible en {self._ruta} ({motivo}); se movió a {ruta_apartada}")

    def guardar(self, snapshot):
        directorio = os.path.dirname(os.path.abspath(self._ruta))
        os.makedirs(directorio, exist_ok=True)
        ruta_temporal = f"{self._ruta}.tmp"
        with open(ruta_temporal, 'w', encoding='utf-8') as archivo:
            json.dump(snapshot, archivo, ensure_ascii=False, indent=2)
        os.replace(ruta_temporal, self._ruta)
