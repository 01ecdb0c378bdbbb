# RUTA: reclutamiento/domain/repositories/i_snapshot_repository.py
# Importa ABC (Abstract Base Class) y abstractmethod para definir una interfaz.
from abc import ABC, abstractmethod


# Define la interfaz 'ISnapshotRepository'.
# El almacén de entidades guarda el estado completo de la plataforma como una sola
# instantánea (las siete colecciones más el logo), en el formato de AlmacenEntidades.to_snapshot().
class ISnapshotRepository(ABC):
    # Método abstracto para leer la última instantánea guardada.
    # Debe devolver None si todavía no existe ninguna.
    @abstractmethod
    def cargar(self):
        pass

    # Método abstracto para guardar la instantánea completa.
    # Cualquier fallo se propaga como excepción: el almacén decide cómo informarlo.
    @abstractmethod
    def guardar(self, snapshot):
        pass
