# RUTA: reclutamiento/application/services/ciclo_vida_service.py
"""
Ciclo de vida del candidato.

Las funciones de este módulo son puras: reciben un trabajador, validan la transición
y devuelven una copia actualizada sin tocar el original. CicloVidaService las aplica
sobre el almacén de entidades y registra cada cambio.
"""

import logging

from reclutamiento.domain.exceptions import TransicionInvalidaError
from reclutamiento.domain.models.catalogos import (
    MOTIVOS_RECHAZO, NOTA_ACREDITACION, NOTA_CARPETA_SOLICITADA, NOTA_CONTRATADO
)
from reclutamiento.domain.models.enums import EstadoCliente, EstadoDocumental, ProximoEscenario

logger = logging.getLogger(__name__)

ETAPAS_RECHAZABLES = (
    ProximoEscenario.INGRESO,
    ProximoEscenario.ENTREVISTA,
    ProximoEscenario.EVALUACION,
)

# Etapas que cuentan como "aprobados" para completar un proyecto
ETAPAS_APROBADAS = (
    ProximoEscenario.APROBADO_PARA_CONTRATAR,
    ProximoEscenario.CARPETA_SOLICITADA,
)


def _requerir_motivo(motivo, mensaje):
    motivo = (motivo or '').strip()
    if not motivo:
        raise TransicionInvalidaError(mensaje)
    return motivo


# ===== ESTADO DOCUMENTAL =====

def validar_documentos(trabajador):
    if trabajador.estado_documental != EstadoDocumental.EN_REVISION:
        raise TransicionInvalidaError(
            f"Solo se pueden validar trabajadores en revisión documental "
            f"(estado actual: {trabajador.estado_documental.value})."
        )
    return trabajador.copiar(
        estado_documental=EstadoDocumental.VALIDADO,
        motivo_rechazo_documental=None,
    )


def rechazar_documentos(trabajador, motivo):
    motivo = _requerir_motivo(motivo, "Debe indicar el motivo del rechazo documental.")
    if trabajador.estado_documental not in (EstadoDocumental.EN_REVISION, EstadoDocumental.VALIDADO):
        raise TransicionInvalidaError(
            f"No se puede rechazar documentalmente a un trabajador en estado "
            f"'{trabajador.estado_documental.value}'."
        )
    if trabajador.proyecto_asignado:
        raise TransicionInvalidaError("El trabajador está asignado a un proyecto; no se puede rechazar su documentación.")
    return trabajador.copiar(
        estado_documental=EstadoDocumental.RECHAZADO_DOCUMENTAL,
        motivo_rechazo_documental=motivo,
    )


def solicitar_revalidacion(trabajador):
    """Devuelve al trabajador a revisión. Si no estaba rechazado, no cambia nada."""
    if trabajador.estado_documental != EstadoDocumental.RECHAZADO_DOCUMENTAL:
        return trabajador.copiar()
    return trabajador.copiar(
        estado_documental=EstadoDocumental.EN_REVISION,
        motivo_rechazo_documental=None,
    )


# ===== ASIGNACIÓN A PROYECTO =====

def asignar_a_proyecto(trabajador, proyecto_id):
    if not proyecto_id:
        raise TransicionInvalidaError("Debe seleccionar un proyecto.")
    if trabajador.estado_documental != EstadoDocumental.VALIDADO:
        raise TransicionInvalidaError(
            f"Solo se pueden asignar trabajadores validados "
            f"(estado actual: {trabajador.estado_documental.value})."
        )
    if trabajador.proyecto_asignado:
        raise TransicionInvalidaError(
            f"El trabajador ya está asignado al proyecto {trabajador.proyecto_asignado}."
        )
    return trabajador.copiar(
        estado_documental=EstadoDocumental.ASIGNADO,
        proyecto_asignado=proyecto_id,
        disponible=False,
        estado_cliente=EstadoCliente.PENDIENTE,
        proximo_escenario=ProximoEscenario.INGRESO,
        ultima_accion=None,
    )


# ===== ETAPAS DEL CLIENTE =====

def siguiente_etapa(etapa):
    """
    Etapa a la que se llega al aprobar al candidato en `etapa`.
    Devuelve None si la etapa no se avanza individualmente.
    """
    if etapa == ProximoEscenario.INGRESO:
        return ProximoEscenario.ENTREVISTA
    elif etapa == ProximoEscenario.ENTREVISTA:
        return ProximoEscenario.EVALUACION
    elif etapa == ProximoEscenario.EVALUACION:
        return ProximoEscenario.APROBADO_PARA_CONTRATAR
    elif etapa == ProximoEscenario.APROBADO_PARA_CONTRATAR:
        # Pasa a carpeta solicitada solo mediante la solicitud en lote
        return None
    elif etapa == ProximoEscenario.CARPETA_SOLICITADA:
        return None
    elif etapa == ProximoEscenario.ACREDITACION:
        return None
    elif etapa == ProximoEscenario.CONTRATADO:
        return None
    raise ValueError(f"Etapa desconocida: {etapa!r}")


def motivos_rechazo_para(etapa):
    return list(MOTIVOS_RECHAZO.get(etapa, []))


def avanzar_etapa(trabajador):
    if not trabajador.proyecto_asignado or trabajador.proximo_escenario is None:
        raise TransicionInvalidaError("El trabajador no está en proceso con ningún proyecto.")
    nueva = siguiente_etapa(trabajador.proximo_escenario)
    if nueva is None:
        raise TransicionInvalidaError(
            f"La etapa '{trabajador.proximo_escenario.value}' no tiene una etapa siguiente que se pueda aprobar."
        )
    estado = EstadoCliente.APROBADO if nueva == ProximoEscenario.APROBADO_PARA_CONTRATAR else EstadoCliente.PENDIENTE
    return trabajador.copiar(
        proximo_escenario=nueva,
        estado_cliente=estado,
        ultima_accion=f"Avanzado a: {nueva.value}",
        motivo_rechazo=None,
    )


def rechazar_en_etapa(trabajador, motivo):
    """
    El cliente descarta al candidato. El trabajador queda libre para otro proyecto
    y conserva el proyecto anterior en ultimo_proyecto_asignado.
    """
    motivo = _requerir_motivo(motivo, "Por favor, seleccione un motivo de rechazo.")
    if not trabajador.proyecto_asignado or trabajador.proximo_escenario not in ETAPAS_RECHAZABLES:
        etapa = trabajador.proximo_escenario.value if trabajador.proximo_escenario else 'sin etapa'
        raise TransicionInvalidaError(f"No se puede rechazar a un candidato en la etapa '{etapa}'.")
    estado_documental = trabajador.estado_documental
    if estado_documental == EstadoDocumental.ASIGNADO:
        estado_documental = EstadoDocumental.VALIDADO
    return trabajador.copiar(
        estado_documental=estado_documental,
        estado_cliente=EstadoCliente.RECHAZADO,
        motivo_rechazo=motivo,
        disponible=True,
        ultimo_proyecto_asignado=trabajador.proyecto_asignado,
        proyecto_asignado=None,
        proximo_escenario=None,
        ultima_accion=f"Rechazado. Motivo: {motivo}",
    )


def _transicion_masiva(trabajadores, ids, desde, hacia, nota):
    # Los IDs que no cumplen la precondición se omiten sin afectar al resto
    seleccion = set(ids or [])
    return [
        t.copiar(proximo_escenario=hacia, ultima_accion=nota)
        for t in trabajadores
        if t.id in seleccion and t.proyecto_asignado and t.proximo_escenario in desde
    ]


def solicitar_carpetas(trabajadores, ids, nota=NOTA_CARPETA_SOLICITADA):
    """Aprobado para contratar -> Carpeta solicitada. Devuelve solo los trabajadores modificados."""
    return _transicion_masiva(
        trabajadores, ids, (ProximoEscenario.APROBADO_PARA_CONTRATAR,), ProximoEscenario.CARPETA_SOLICITADA, nota
    )


def enviar_a_acreditacion(trabajadores, ids, nota=NOTA_ACREDITACION):
    return _transicion_masiva(
        trabajadores, ids, (ProximoEscenario.CARPETA_SOLICITADA,), ProximoEscenario.ACREDITACION, nota
    )


def marcar_contratados(trabajadores, ids, nota=NOTA_CONTRATADO):
    return _transicion_masiva(
        trabajadores, ids,
        (ProximoEscenario.CARPETA_SOLICITADA, ProximoEscenario.ACREDITACION),
        ProximoEscenario.CONTRATADO, nota,
    )


# ===== INVARIANTES Y COMPLETITUD =====

def verificar_consistencia(trabajador):
    """Lista de inconsistencias del trabajador. Vacía si cumple todas las reglas."""
    errores = []
    if bool(trabajador.proximo_escenario) != bool(trabajador.proyecto_asignado):
        errores.append("La etapa del cliente y el proyecto asignado deben existir juntos.")
    if trabajador.proximo_escenario and trabajador.estado_cliente is None:
        errores.append("Un trabajador en proceso debe tener estado con el cliente.")
    if (trabajador.estado_cliente is not None and trabajador.proximo_escenario is None
            and trabajador.estado_cliente != EstadoCliente.RECHAZADO):
        errores.append("Solo un trabajador rechazado puede conservar estado con el cliente sin etapa.")
    if trabajador.estado_cliente == EstadoCliente.RECHAZADO and trabajador.proximo_escenario is None:
        if trabajador.proyecto_asignado or not trabajador.disponible:
            errores.append("Un trabajador rechazado por el cliente debe quedar libre y sin proyecto.")
    return errores


def calcular_completitud(proyecto, trabajadores):
    """
    Avance de contratación de un proyecto. Se calcula en cada lectura y nunca se guarda.
    """
    del_proyecto = [t for t in trabajadores if t.proyecto_asignado == proyecto.id]
    total_aprobados = sum(1 for t in del_proyecto if t.proximo_escenario in ETAPAS_APROBADAS)
    solicitados = sum(1 for t in del_proyecto if t.proximo_escenario == ProximoEscenario.CARPETA_SOLICITADA)
    requeridos = proyecto.cantidad_trabajadores or 0

    completado = requeridos > 0 and total_aprobados >= requeridos
    contratacion_iniciada = solicitados > 0
    porcentaje = min(100.0, total_aprobados / requeridos * 100) if requeridos > 0 else 0.0

    return {
        'estado': 'Completado' if completado else 'En Proceso',
        'total_requerido': requeridos,
        'total_aprobados': total_aprobados,
        'carpetas_solicitadas': solicitados,
        'porcentaje_progreso': porcentaje,
        'completado': completado,
        'contratacion_iniciada': contratacion_iniciada,
        'mostrar_panel': completado or contratacion_iniciada,
    }


class CicloVidaService:
    """Aplica las transiciones del ciclo de vida sobre el almacén de entidades."""

    def __init__(self, almacen):
        self._almacen = almacen

    def _trabajador(self, trabajador_id):
        return self._almacen.requerir('trabajadores', trabajador_id, 'Trabajador')

    def _aplicar(self, trabajador_id, transicion, descripcion, *args):
        actual = self._trabajador(trabajador_id)
        try:
            actualizado = transicion(actual, *args)
        except TransicionInvalidaError as e:
            logger.warning(f"Transición rechazada ({descripcion}) para {trabajador_id}: {e}")
            raise
        self._almacen.actualizar_trabajador(actualizado)
        logger.info(f"{descripcion}: trabajador {trabajador_id}")
        return actualizado

    def _verificar_propiedad(self, proyecto_id, usuario_actual):
        # usuario_actual None significa personal interno (revisor/admin)
        if usuario_actual is None:
            return
        proyecto = self._almacen.obtener_proyecto(proyecto_id)
        if proyecto is None or proyecto.cliente_id != usuario_actual.cliente_id:
            logger.warning(f"SEGURIDAD: {usuario_actual.get_id()} intentó operar sobre el proyecto {proyecto_id}")
            raise PermissionError("No tiene permisos sobre este proyecto.")

    # --- Estado documental ---

    def validar_documentos(self, trabajador_id):
        return self._aplicar(trabajador_id, validar_documentos, "Documentos validados")

    def rechazar_documentos(self, trabajador_id, motivo):
        return self._aplicar(trabajador_id, rechazar_documentos, "Documentos rechazados", motivo)

    def solicitar_revalidacion(self, trabajador_id):
        return self._aplicar(trabajador_id, solicitar_revalidacion, "Revalidación solicitada")

    # --- Asignación ---

    def asignar_a_proyecto(self, trabajador_id, proyecto_id):
        proyecto = self._almacen.obtener_proyecto(proyecto_id)
        if proyecto is None or not proyecto.publicado:
            raise TransicionInvalidaError("Solo se puede asignar a proyectos publicados.")
        return self._aplicar(trabajador_id, asignar_a_proyecto, f"Asignado a {proyecto_id}", proyecto_id)

    # --- Etapas del cliente ---

    def avanzar_etapa(self, trabajador_id, usuario_actual=None):
        self._verificar_propiedad(self._trabajador(trabajador_id).proyecto_asignado, usuario_actual)
        return self._aplicar(trabajador_id, avanzar_etapa, "Etapa avanzada")

    def rechazar_en_etapa(self, trabajador_id, motivo, usuario_actual=None):
        self._verificar_propiedad(self._trabajador(trabajador_id).proyecto_asignado, usuario_actual)
        return self._aplicar(trabajador_id, rechazar_en_etapa, "Rechazado por el cliente", motivo)

    def _aplicar_masivo(self, transicion, proyecto_id, ids, descripcion):
        trabajadores = [t for t in self._almacen.trabajadores if t.proyecto_asignado == proyecto_id]
        if ids is None:
            ids = [t.id for t in trabajadores]
        actualizados = transicion(trabajadores, ids)
        self._almacen.actualizar_trabajadores(actualizados)
        logger.info(f"{descripcion} en {proyecto_id}: {len(actualizados)} de {len(ids)} trabajadores")
        return actualizados

    def solicitar_carpetas(self, proyecto_id, ids=None, usuario_actual=None):
        """Solicita carpeta para los IDs indicados o, sin IDs, para todos los listos del proyecto."""
        self._verificar_propiedad(proyecto_id, usuario_actual)
        return self._aplicar_masivo(solicitar_carpetas, proyecto_id, ids, "Carpetas solicitadas")

    def enviar_a_acreditacion(self, proyecto_id, ids=None):
        return self._aplicar_masivo(enviar_a_acreditacion, proyecto_id, ids, "Enviados a acreditación")

    def marcar_contratados(self, proyecto_id, ids=None):
        return self._aplicar_masivo(marcar_contratados, proyecto_id, ids, "Contratación confirmada")

    def completitud_proyecto(self, proyecto_id):
        proyecto = self._almacen.requerir('proyectos', proyecto_id, 'Proyecto')
        return calcular_completitud(proyecto, self._almacen.trabajadores)
