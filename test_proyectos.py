"""Pruebas de creación y publicación de proyectos."""

from datetime import date

import pytest

from reclutamiento.application.services.proyecto_service import (
    ProyectoService, duracion_reclutamiento, proyecto_desde_datos, validar_publicacion
)
from reclutamiento.domain.exceptions import EntidadNoEncontradaError, TransicionInvalidaError
from reclutamiento.domain.models.enums import EstadoProyecto


def _datos(**cambios):
    datos = {
        'nombre': 'Parada de Planta Sur',
        'clienteId': 'cli-1',
        'ciudad': 'Antofagasta',
        'puestos': [
            {'tipo': 'Soldador', 'categoria': 'Técnico Calificado', 'cantidad': 4, 'sueldo': 900000,
             'turnos': [{'nombre': '7x7 Día', 'cantidad': 2}, {'nombre': '7x7 Noche', 'cantidad': 2}]},
            {'tipo': 'Rigger / Maniobrista', 'categoria': 'Técnico', 'cantidad': 1, 'sueldo': 800000,
             'turnos': [{'nombre': 'Otro', 'horario': 'Turno especial', 'cantidad': 1}]},
        ],
        'fechaInicioReclutamiento': '2030-03-01',
        'fechaTerminoReclutamiento': '2030-03-20',
        'fechaInicioTrabajo': '2030-04-01',
    }
    datos.update(cambios)
    return datos


def test_proyecto_desde_datos_suma_puestos_y_aplica_horarios():
    proyecto = proyecto_desde_datos(_datos(), 'pro-x')
    assert proyecto.cantidad_trabajadores == 5
    assert proyecto.puestos[0].turnos[0].horario == '07:00 - 19:00'
    assert proyecto.puestos[1].turnos[0].horario == 'Turno especial'
    assert proyecto.fecha_inicio_trabajo == date(2030, 4, 1)
    assert duracion_reclutamiento(proyecto) == 20


def test_publicar_exige_turnos_completos():
    datos = _datos()
    datos['puestos'][0]['turnos'][1]['cantidad'] = 1
    with pytest.raises(TransicionInvalidaError, match='no coincide'):
        validar_publicacion(proyecto_desde_datos(datos, 'pro-x'))


@pytest.mark.parametrize('fechas', [
    {'fechaTerminoReclutamiento': '2030-02-01'},
    {'fechaInicioTrabajo': '2030-03-20'},
    {'fechaInicioReclutamiento': None},
])
def test_publicar_exige_fechas_en_orden(fechas):
    with pytest.raises(TransicionInvalidaError, match='orden cronológico'):
        validar_publicacion(proyecto_desde_datos(_datos(**fechas), 'pro-x'))


def test_borrador_no_valida_turnos_ni_fechas(almacen_demo):
    datos = _datos(fechaInicioTrabajo=None)
    datos['puestos'][0]['turnos'] = []
    proyecto = ProyectoService(almacen_demo).guardar_proyecto(datos, 'borrador')
    assert proyecto.estado == EstadoProyecto.BORRADOR
    assert almacen_demo.obtener_proyecto(proyecto.id) is not None


def test_borrador_exige_cliente_y_cantidades(almacen_demo):
    servicio = ProyectoService(almacen_demo)
    with pytest.raises(TransicionInvalidaError):
        servicio.guardar_proyecto(_datos(clienteId=None), 'borrador')
    datos = _datos()
    datos['puestos'][1]['cantidad'] = 0
    with pytest.raises(TransicionInvalidaError):
        servicio.guardar_proyecto(datos, 'borrador')


def test_publicar_vincula_el_proyecto_al_cliente(almacen_demo):
    proyecto = ProyectoService(almacen_demo).guardar_proyecto(_datos(), EstadoProyecto.PUBLICADO)
    assert proyecto.publicado
    assert proyecto.id in almacen_demo.obtener_cliente('cli-1').proyectos_activos


def test_publicar_borrador_existente(almacen_demo):
    servicio = ProyectoService(almacen_demo)
    borrador = servicio.guardar_proyecto(_datos(), 'borrador')
    publicado = servicio.guardar_proyecto(_datos(nombre='Renombrado'), 'publicado', borrador.id)
    assert publicado.id == borrador.id
    assert almacen_demo.obtener_proyecto(borrador.id).nombre == 'Renombrado'
    assert [p.id for p in servicio.listar('borrador')] == []
    assert almacen_demo.obtener_cliente('cli-1').proyectos_activos.count(borrador.id) == 1


def test_actualizar_proyecto_inexistente(almacen_demo):
    with pytest.raises(EntidadNoEncontradaError):
        ProyectoService(almacen_demo).guardar_proyecto(_datos(), 'publicado', 'pro-nada')
