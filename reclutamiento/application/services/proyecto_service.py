# RUTA: reclutamiento/application/services/proyecto_service.py

import logging

from reclutamiento.domain.exceptions import TransicionInvalidaError
from reclutamiento.domain.models.catalogos import TURNOS_INDUSTRIA
from reclutamiento.domain.models.enums import CategoriaTrabajador, EstadoProyecto
from reclutamiento.domain.models.fechas import a_fecha_o_none
from reclutamiento.domain.models.proyecto import Proyecto, Puesto, TurnoAsignado

logger = logging.getLogger(__name__)


def validar_puesto(puesto):
    if not (puesto.tipo or '').strip():
        raise TransicionInvalidaError('Por favor, seleccione un "Nombre del Cargo".')
    if puesto.cantidad < 1:
        raise TransicionInvalidaError('La cantidad debe ser al menos 1.')


def validar_publicacion(proyecto):
    """Reglas que solo se exigen al publicar: turnos completos y fechas en orden."""
    for puesto in proyecto.puestos:
        if puesto.total_en_turnos != puesto.cantidad:
            raise TransicionInvalidaError(
                f'Para el cargo "{puesto.tipo}", la cantidad de trabajadores asignados a turnos '
                f'({puesto.total_en_turnos}) no coincide con el total requerido ({puesto.cantidad}). '
                f'Por favor, ajuste las cantidades.'
            )
    inicio = proyecto.fecha_inicio_reclutamiento
    termino = proyecto.fecha_termino_reclutamiento
    trabajo = proyecto.fecha_inicio_trabajo
    if not (inicio and termino and trabajo) or not (inicio < termino < trabajo):
        raise TransicionInvalidaError(
            'Las fechas deben ser válidas y seguir el orden cronológico: '
            'Inicio Proceso < Término Proceso < Inicio Operación.'
        )


def duracion_reclutamiento(proyecto):
    """Días del proceso de reclutamiento, contando ambos extremos."""
    inicio = proyecto.fecha_inicio_reclutamiento
    termino = proyecto.fecha_termino_reclutamiento
    if not inicio or not termino or termino < inicio:
        return 0
    return (termino - inicio).days + 1


def _turno_desde_datos(datos):
    turno = TurnoAsignado.from_dict(datos)
    # Los turnos estándar traen su horario; 'Otro' conserva el escrito por el usuario
    if turno.nombre in TURNOS_INDUSTRIA and turno.nombre != 'Otro':
        turno.horario = TURNOS_INDUSTRIA[turno.nombre]
    return turno


def proyecto_desde_datos(datos, proyecto_id=None, usuarios_asignados=None):
    """Construye un Proyecto a partir de los datos del formulario (formato camelCase)."""
    try:
        puestos = [
            Puesto(
                tipo=p.get('tipo', ''),
                categoria=CategoriaTrabajador(p.get('categoria') or CategoriaTrabajador.TECNICO.value),
                cantidad=int(p.get('cantidad') or 0),
                sueldo=p.get('sueldo') or 0,
                turnos=[_turno_desde_datos(t) for t in p.get('turnos') or []],
            )
            for p in datos.get('puestos') or []
        ]
    except (TypeError, ValueError) as e:
        raise TransicionInvalidaError(f"Datos de puestos inválidos: {e}")
    proyecto = Proyecto(
        id=proyecto_id,
        nombre=(datos.get('nombre') or '').strip(),
        cliente_id=datos.get('clienteId'),
        puestos=puestos,
        ciudad=datos.get('ciudad') or '',
        fecha_inicio_reclutamiento=a_fecha_o_none(datos.get('fechaInicioReclutamiento')),
        fecha_termino_reclutamiento=a_fecha_o_none(datos.get('fechaTerminoReclutamiento')),
        fecha_inicio_trabajo=a_fecha_o_none(datos.get('fechaInicioTrabajo')),
        usuarios_asignados=list(usuarios_asignados or []),
        beneficios=datos.get('beneficios'),
    )
    proyecto.cantidad_trabajadores = proyecto.total_requerido()
    return proyecto


class ProyectoService:
    def __init__(self, almacen):
        self._almacen = almacen

    def _validar(self, proyecto, estado):
        if not proyecto.cliente_id:
            raise TransicionInvalidaError('Debe seleccionar un cliente.')
        if self._almacen.obtener_cliente(proyecto.cliente_id) is None:
            raise TransicionInvalidaError('El cliente seleccionado no existe.')
        for puesto in proyecto.puestos:
            validar_puesto(puesto)
        if estado == EstadoProyecto.PUBLICADO:
            validar_publicacion(proyecto)

    def _vincular_a_cliente(self, proyecto_id, cliente_id):
        cliente = self._almacen.obtener_cliente(cliente_id)
        if proyecto_id in cliente.proyectos_activos:
            return
        self._almacen.actualizar_cliente(cliente.copiar(proyectos_activos=cliente.proyectos_activos + [proyecto_id]))

    def guardar_proyecto(self, datos, estado, proyecto_id=None):
        """
        Crea o actualiza un proyecto como borrador o publicado.
        Las validaciones de turnos y fechas solo se aplican al publicar.
        """
        estado = EstadoProyecto(estado)
        existente = None
        if proyecto_id:
            existente = self._almacen.requerir('proyectos', proyecto_id, 'Proyecto')

        proyecto = proyecto_desde_datos(
            datos,
            proyecto_id=proyecto_id or self._almacen.nuevo_id('pro'),
            usuarios_asignados=existente.usuarios_asignados if existente else datos.get('usuariosAsignados'),
        )
        proyecto.estado = estado
        try:
            self._validar(proyecto, estado)
        except TransicionInvalidaError as e:
            logger.warning(f"Proyecto '{proyecto.nombre}' no guardado: {e}")
            raise

        if existente:
            self._almacen.actualizar_proyecto(proyecto)
            if existente.cliente_id != proyecto.cliente_id:
                anterior = self._almacen.obtener_cliente(existente.cliente_id)
                if anterior is not None:
                    self._almacen.actualizar_cliente(anterior.copiar(
                        proyectos_activos=[p for p in anterior.proyectos_activos if p != proyecto.id]
                    ))
        else:
            self._almacen.agregar_proyecto(proyecto)
        self._vincular_a_cliente(proyecto.id, proyecto.cliente_id)
        logger.info(f"Proyecto {proyecto.id} guardado como {estado.value}")
        return proyecto

    def listar(self, estado=None):
        if estado is None:
            return list(self._almacen.proyectos)
        estado = EstadoProyecto(estado)
        return [p for p in self._almacen.proyectos if p.estado == estado]
