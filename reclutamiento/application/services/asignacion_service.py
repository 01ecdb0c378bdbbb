# RUTA: reclutamiento/application/services/asignacion_service.py

import logging

from reclutamiento.domain.exceptions import TransicionInvalidaError
from reclutamiento.domain.models.enums import EstadoDocumental

logger = logging.getLogger(__name__)


def trabajadores_sin_revisor(trabajadores):
    """Trabajadores en revisión documental que todavía no tienen revisor."""
    return [
        t for t in trabajadores
        if t.estado_documental == EstadoDocumental.EN_REVISION and not t.revisor_asignado_id
    ]


def distribuir(trabajadores, asignaciones):
    """
    Aplica una lista de asignaciones {'trabajador_id', 'revisor_id'} y devuelve
    solo los trabajadores modificados. No comprueba que el revisor exista.
    """
    revisor_por_trabajador = {a['trabajador_id']: a['revisor_id'] for a in asignaciones}
    return [
        t.copiar(revisor_asignado_id=revisor_por_trabajador[t.id])
        for t in trabajadores
        if t.id in revisor_por_trabajador
    ]


def distribucion_automatica(trabajadores_sin_asignar, revisores):
    """
    Reparte en round-robin, en el orden de ambas listas. Con las mismas entradas
    siempre produce las mismas asignaciones.
    """
    if not revisores:
        raise TransicionInvalidaError("No hay revisores disponibles para la distribución.")
    asignaciones = []
    indice = 0
    for trabajador in trabajadores_sin_asignar:
        asignaciones.append({'trabajador_id': trabajador.id, 'revisor_id': revisores[indice].id})
        indice = (indice + 1) % len(revisores)
    return asignaciones


def carga_revisor(trabajadores, revisor_id):
    """Trabajadores pendientes de revisión a cargo del revisor."""
    return sum(
        1 for t in trabajadores
        if t.revisor_asignado_id == revisor_id and t.estado_documental == EstadoDocumental.EN_REVISION
    )


def filtrar_por_termino(trabajadores, termino):
    if not termino:
        return list(trabajadores)
    termino = termino.lower()
    return [
        t for t in trabajadores
        if termino in (t.nombre or '').lower()
        or termino in (t.rut or '').lower()
        or termino in (t.especialidad or '').lower()
    ]


class AsignacionService:
    def __init__(self, almacen):
        self._almacen = almacen

    def pendientes_de_distribucion(self):
        return trabajadores_sin_revisor(self._almacen.trabajadores)

    def cargas(self):
        """Carga de trabajo de cada revisor, en el orden en que están registrados."""
        trabajadores = self._almacen.trabajadores
        return [
            {'revisor_id': r.id, 'nombre': r.nombre, 'carga': carga_revisor(trabajadores, r.id)}
            for r in self._almacen.revisores
        ]

    def asignar_manual(self, trabajador_ids, revisor_id):
        if not trabajador_ids:
            raise TransicionInvalidaError("Debe seleccionar al menos un trabajador.")
        if not revisor_id:
            raise TransicionInvalidaError("Debe seleccionar un revisor.")
        asignaciones = [{'trabajador_id': t_id, 'revisor_id': revisor_id} for t_id in trabajador_ids]
        return self._aplicar(asignaciones)

    def distribuir_automaticamente(self):
        pendientes = self.pendientes_de_distribucion()
        if not pendientes:
            logger.info("Distribución automática: no hay trabajadores pendientes.")
            return []
        try:
            asignaciones = distribucion_automatica(pendientes, self._almacen.revisores)
        except TransicionInvalidaError as e:
            logger.warning(f"Distribución automática cancelada: {e}")
            raise
        self._aplicar(asignaciones)
        return asignaciones

    def _aplicar(self, asignaciones):
        actualizados = distribuir(self._almacen.trabajadores, asignaciones)
        self._almacen.actualizar_trabajadores(actualizados)
        logger.info(f"Distribución aplicada: {len(actualizados)} trabajadores asignados a revisores")
        return actualizados

    def pool_libre(self, termino=None):
        """Trabajadores validados sin proyecto, disponibles para asignar."""
        libres = [t for t in self._almacen.trabajadores if t.en_pool_libre]
        return filtrar_por_termino(libres, termino)

    def proyectos_asignables(self):
        return [p for p in self._almacen.proyectos if p.publicado]
