"""
Pruebas del ciclo de vida del candidato: estado documental, asignación,
etapas con el cliente, operaciones en lote y completitud del proyecto.
"""

import pytest

from reclutamiento.application.services import ciclo_vida_service as ciclo
from reclutamiento.application.services.ciclo_vida_service import CicloVidaService
from reclutamiento.application.services.proyecto_service import ProyectoService
from reclutamiento.application.services.reportes_service import ReportesService
from reclutamiento.domain.exceptions import EntidadNoEncontradaError, TransicionInvalidaError
from reclutamiento.domain.models.catalogos import NOTA_CARPETA_SOLICITADA
from reclutamiento.domain.models.cliente import Usuario
from reclutamiento.domain.models.cuentas import UsuarioSesion
from reclutamiento.domain.models.enums import (
    EstadoCliente, EstadoDocumental, EstadoProyecto, ProximoEscenario, Rol
)
from reclutamiento.domain.models.proyecto import Proyecto
from reclutamiento.domain.models.trabajador import Trabajador


def _trabajador(**datos):
    base = {'id': 'trab-x', 'nombre': 'Prueba Uno', 'estado_documental': EstadoDocumental.EN_REVISION}
    base.update(datos)
    return Trabajador(**base)


def _en_proceso(etapa, proyecto_id='pro-1', **datos):
    return _trabajador(
        estado_documental=EstadoDocumental.ASIGNADO,
        proyecto_asignado=proyecto_id,
        estado_cliente=EstadoCliente.PENDIENTE,
        proximo_escenario=etapa,
        disponible=False,
        **datos,
    )


def _datos_proyecto(cantidad, nombre='Proyecto de prueba', cliente_id='cli-1'):
    return {
        'nombre': nombre,
        'clienteId': cliente_id,
        'ciudad': 'Calama',
        'puestos': [{
            'tipo': 'Soldador',
            'categoria': 'Técnico',
            'cantidad': cantidad,
            'sueldo': 900000,
            'turnos': [{'nombre': '7x7 Día', 'cantidad': cantidad}],
        }],
        'fechaInicioReclutamiento': '2030-01-01',
        'fechaTerminoReclutamiento': '2030-01-31',
        'fechaInicioTrabajo': '2030-02-15',
    }


# ===== ESTADO DOCUMENTAL =====

def test_validar_documentos_desde_revision():
    original = _trabajador(motivo_rechazo_documental='viejo')
    validado = ciclo.validar_documentos(original)
    assert validado.estado_documental == EstadoDocumental.VALIDADO
    assert validado.motivo_rechazo_documental is None
    # La función no modifica el original
    assert original.estado_documental == EstadoDocumental.EN_REVISION


def test_validar_documentos_fuera_de_revision_falla():
    with pytest.raises(TransicionInvalidaError):
        ciclo.validar_documentos(_trabajador(estado_documental=EstadoDocumental.VALIDADO))


def test_rechazar_documentos_exige_motivo():
    with pytest.raises(TransicionInvalidaError):
        ciclo.rechazar_documentos(_trabajador(), '   ')


def test_rechazar_y_revalidar_documentos():
    rechazado = ciclo.rechazar_documentos(_trabajador(), 'Cédula vencida')
    assert rechazado.estado_documental == EstadoDocumental.RECHAZADO_DOCUMENTAL
    assert rechazado.motivo_rechazo_documental == 'Cédula vencida'

    revalidado = ciclo.solicitar_revalidacion(rechazado)
    assert revalidado.estado_documental == EstadoDocumental.EN_REVISION
    assert revalidado.motivo_rechazo_documental is None


def test_revalidar_trabajador_no_rechazado_no_cambia_nada():
    validado = _trabajador(estado_documental=EstadoDocumental.VALIDADO)
    copia = ciclo.solicitar_revalidacion(validado)
    assert copia is not validado
    assert copia.estado_documental == EstadoDocumental.VALIDADO


def test_no_se_rechaza_documentacion_de_trabajador_en_proyecto():
    with pytest.raises(TransicionInvalidaError):
        ciclo.rechazar_documentos(_en_proceso(ProximoEscenario.INGRESO), 'motivo')


# ===== ASIGNACIÓN =====

def test_asignar_a_proyecto_inicia_el_proceso():
    asignado = ciclo.asignar_a_proyecto(_trabajador(estado_documental=EstadoDocumental.VALIDADO), 'pro-9')
    assert asignado.proyecto_asignado == 'pro-9'
    assert asignado.estado_documental == EstadoDocumental.ASIGNADO
    assert asignado.estado_cliente == EstadoCliente.PENDIENTE
    assert asignado.proximo_escenario == ProximoEscenario.INGRESO
    assert asignado.disponible is False


@pytest.mark.parametrize('trabajador', [
    _trabajador(),
    _trabajador(estado_documental=EstadoDocumental.RECHAZADO_DOCUMENTAL),
    _trabajador(estado_documental=EstadoDocumental.VALIDADO, proyecto_asignado='pro-1',
                estado_cliente=EstadoCliente.PENDIENTE, proximo_escenario=ProximoEscenario.INGRESO),
])
def test_asignar_solo_trabajadores_validados_y_libres(trabajador):
    with pytest.raises(TransicionInvalidaError):
        ciclo.asignar_a_proyecto(trabajador, 'pro-9')


def test_asignacion_ilegal_no_modifica_el_almacen(almacen_demo):
    servicio = CicloVidaService(almacen_demo)
    antes = almacen_demo.obtener_trabajador('trab-1').to_dict()
    with pytest.raises(TransicionInvalidaError):
        servicio.asignar_a_proyecto('trab-1', 'pro-1')
    assert almacen_demo.obtener_trabajador('trab-1').to_dict() == antes


def test_asignar_a_proyecto_no_publicado_falla(almacen_demo):
    borrador = ProyectoService(almacen_demo).guardar_proyecto(
        {'nombre': 'Borrador', 'clienteId': 'cli-1'}, EstadoProyecto.BORRADOR
    )
    with pytest.raises(TransicionInvalidaError):
        CicloVidaService(almacen_demo).asignar_a_proyecto('trab-9', borrador.id)


def test_operar_sobre_trabajador_inexistente(almacen_demo):
    with pytest.raises(EntidadNoEncontradaError):
        CicloVidaService(almacen_demo).validar_documentos('trab-no-existe')


# ===== ETAPAS DEL CLIENTE =====

def test_siguiente_etapa_cubre_todas_las_etapas():
    for etapa in ProximoEscenario:
        ciclo.siguiente_etapa(etapa)
    assert ciclo.siguiente_etapa(ProximoEscenario.INGRESO) == ProximoEscenario.ENTREVISTA
    assert ciclo.siguiente_etapa(ProximoEscenario.EVALUACION) == ProximoEscenario.APROBADO_PARA_CONTRATAR
    assert ciclo.siguiente_etapa(ProximoEscenario.APROBADO_PARA_CONTRATAR) is None


def test_avanzar_etapas_hasta_aprobado():
    t = _en_proceso(ProximoEscenario.INGRESO)
    t = ciclo.avanzar_etapa(t)
    assert t.proximo_escenario == ProximoEscenario.ENTREVISTA
    assert t.estado_cliente == EstadoCliente.PENDIENTE
    assert t.ultima_accion == 'Avanzado a: En entrevista'
    t = ciclo.avanzar_etapa(ciclo.avanzar_etapa(t))
    assert t.proximo_escenario == ProximoEscenario.APROBADO_PARA_CONTRATAR
    assert t.estado_cliente == EstadoCliente.APROBADO
    with pytest.raises(TransicionInvalidaError):
        ciclo.avanzar_etapa(t)


def test_rechazar_en_etapa_libera_al_trabajador():
    t = ciclo.rechazar_en_etapa(_en_proceso(ProximoEscenario.ENTREVISTA), 'No asistió a entrevista')
    assert t.proyecto_asignado is None
    assert t.disponible is True
    assert t.ultimo_proyecto_asignado == 'pro-1'
    assert t.estado_cliente == EstadoCliente.RECHAZADO
    assert t.proximo_escenario is None
    assert t.estado_documental == EstadoDocumental.VALIDADO
    assert t.ultima_accion == 'Rechazado. Motivo: No asistió a entrevista'


@pytest.mark.parametrize('etapa', ciclo.ETAPAS_RECHAZABLES)
def test_rechazo_en_cualquier_etapa_cumple_las_reglas(etapa):
    t = ciclo.rechazar_en_etapa(_en_proceso(etapa), 'motivo')
    assert t.proyecto_asignado is None
    assert t.disponible is True
    assert t.ultimo_proyecto_asignado == 'pro-1'
    assert ciclo.verificar_consistencia(t) == []


def test_rechazar_en_etapa_sin_motivo_falla():
    with pytest.raises(TransicionInvalidaError):
        ciclo.rechazar_en_etapa(_en_proceso(ProximoEscenario.INGRESO), '')


def test_no_se_rechaza_candidato_aprobado():
    with pytest.raises(TransicionInvalidaError):
        ciclo.rechazar_en_etapa(_en_proceso(ProximoEscenario.APROBADO_PARA_CONTRATAR), 'motivo')


def test_motivos_de_rechazo_por_etapa():
    assert 'No asistió a exámenes' in ciclo.motivos_rechazo_para(ProximoEscenario.EVALUACION)
    assert ciclo.motivos_rechazo_para(ProximoEscenario.CONTRATADO) == []


def test_usuario_de_otro_cliente_no_puede_avanzar(almacen_demo):
    ajeno = UsuarioSesion(Usuario(id='user-x', email='otro@correo.cl', cliente_id='cli-otro'), Rol.USUARIO)
    with pytest.raises(PermissionError):
        CicloVidaService(almacen_demo).avanzar_etapa('trab-2', ajeno)
    assert almacen_demo.obtener_trabajador('trab-2').proximo_escenario == ProximoEscenario.INGRESO


# ===== OPERACIONES EN LOTE =====

def test_solicitar_carpetas_solo_afecta_a_los_aprobados():
    listos = _en_proceso(ProximoEscenario.APROBADO_PARA_CONTRATAR, id='a')
    en_ingreso = _en_proceso(ProximoEscenario.INGRESO, id='b')
    actualizados = ciclo.solicitar_carpetas([listos, en_ingreso], ['a', 'b'])
    assert [t.id for t in actualizados] == ['a']
    assert actualizados[0].proximo_escenario == ProximoEscenario.CARPETA_SOLICITADA
    assert actualizados[0].ultima_accion == NOTA_CARPETA_SOLICITADA


def test_acreditacion_y_contratacion():
    carpeta = _en_proceso(ProximoEscenario.CARPETA_SOLICITADA, id='a')
    acreditar = ciclo.enviar_a_acreditacion([carpeta], ['a'])[0]
    assert acreditar.proximo_escenario == ProximoEscenario.ACREDITACION
    contratado = ciclo.marcar_contratados([acreditar], ['a'])[0]
    assert contratado.proximo_escenario == ProximoEscenario.CONTRATADO


def test_solicitar_carpetas_sin_ids_toma_todo_el_proyecto(almacen_demo):
    actualizados = CicloVidaService(almacen_demo).solicitar_carpetas('pro-1')
    assert [t.id for t in actualizados] == ['trab-7']
    assert almacen_demo.obtener_trabajador('trab-7').proximo_escenario == ProximoEscenario.CARPETA_SOLICITADA


# ===== INVARIANTES =====

def test_datos_de_demostracion_son_consistentes(almacen_demo):
    for t in almacen_demo.trabajadores:
        assert ciclo.verificar_consistencia(t) == [], t


def test_verificar_consistencia_detecta_etapa_sin_proyecto():
    t = _trabajador(estado_cliente=EstadoCliente.PENDIENTE, proximo_escenario=ProximoEscenario.INGRESO)
    assert ciclo.verificar_consistencia(t)


# ===== COMPLETITUD =====

def test_completitud_con_cero_requeridos():
    proyecto = Proyecto(id='p', cantidad_trabajadores=0)
    resultado = ciclo.calcular_completitud(proyecto, [])
    assert resultado['porcentaje_progreso'] == 0
    assert resultado['completado'] is False


def test_completitud_se_limita_a_cien():
    proyecto = Proyecto(id='pro-1', cantidad_trabajadores=1)
    trabajadores = [
        _en_proceso(ProximoEscenario.APROBADO_PARA_CONTRATAR, id='a'),
        _en_proceso(ProximoEscenario.CARPETA_SOLICITADA, id='b'),
    ]
    resultado = ciclo.calcular_completitud(proyecto, trabajadores)
    assert resultado['porcentaje_progreso'] == 100
    assert resultado['estado'] == 'Completado'
    assert resultado['contratacion_iniciada'] is True


def test_completitud_solo_cuenta_etapas_aprobadas():
    proyecto = Proyecto(id='pro-1', cantidad_trabajadores=4)
    trabajadores = [
        _en_proceso(ProximoEscenario.APROBADO_PARA_CONTRATAR, id='a'),
        _en_proceso(ProximoEscenario.EVALUACION, id='b'),
        _en_proceso(ProximoEscenario.CONTRATADO, id='c'),
        _en_proceso(ProximoEscenario.CARPETA_SOLICITADA, proyecto_id='otro', id='d'),
    ]
    resultado = ciclo.calcular_completitud(proyecto, trabajadores)
    assert resultado['total_aprobados'] == 1
    assert resultado['porcentaje_progreso'] == 25
    assert resultado['contratacion_iniciada'] is False


def test_escenario_proyecto_completo(almacen_demo):
    """Dos trabajadores llegan a 'Aprobado para Contratar' en un proyecto de dos vacantes."""
    proyecto = ProyectoService(almacen_demo).guardar_proyecto(_datos_proyecto(2), EstadoProyecto.PUBLICADO)
    servicio = CicloVidaService(almacen_demo)

    servicio.validar_documentos('trab-1')
    for trabajador_id in ('trab-1', 'trab-9'):
        servicio.asignar_a_proyecto(trabajador_id, proyecto.id)
        for _ in range(3):
            servicio.avanzar_etapa(trabajador_id)

    completitud = servicio.completitud_proyecto(proyecto.id)
    assert completitud['completado'] is True
    assert completitud['mostrar_panel'] is True
    assert completitud['porcentaje_progreso'] == 100


def test_escenario_rechazo_en_evaluacion(almacen_demo):
    """El rechazado sale del tablero, aparece en el historial y puede ir a otro proyecto."""
    servicio = CicloVidaService(almacen_demo)
    reportes = ReportesService(almacen_demo)
    servicio.rechazar_en_etapa('trab-4', 'No asistió a exámenes')

    tablero = reportes.tablero_proyecto('pro-1')
    en_columnas = {fila['id'] for columna in tablero['columnas'].values() for fila in columna}
    assert 'trab-4' not in en_columnas
    assert 'trab-4' in {fila['id'] for fila in tablero['rechazados']}

    historial = {fila['id']: fila for fila in reportes.historial_rechazos()}
    assert historial['trab-4']['ultimoProyectoAsignado'] == 'pro-1'
    assert historial['trab-4']['motivoRechazo'] == 'No asistió a exámenes'

    otro = ProyectoService(almacen_demo).guardar_proyecto(_datos_proyecto(1, 'Proyecto Q'), EstadoProyecto.PUBLICADO)
    asignado = servicio.asignar_a_proyecto('trab-4', otro.id)
    assert asignado.proyecto_asignado == otro.id
    assert asignado.proximo_escenario == ProximoEscenario.INGRESO
