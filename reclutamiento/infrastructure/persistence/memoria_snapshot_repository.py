# RUTA: reclutamiento/infrastructure/persistence/memoria_snapshot_repository.py

import copy

from reclutamiento.domain.repositories.i_snapshot_repository import ISnapshotRepository


class MemoriaSnapshotRepository(ISnapshotRepository):
    """Mantiene la última instantánea en memoria. Se usa en pruebas y cuando no hay archivo configurado."""

    def __init__(self, snapshot_inicial=None):
        self._snapshot = copy.deepcopy(snapshot_inicial)
        self.guardados = 0

    def cargar(self):
        return copy.deepcopy(self._snapshot)

    def guardar(self, snapshot):
        self._snapshot = copy.deepcopy(snapshot)
        self.guardados += 1
