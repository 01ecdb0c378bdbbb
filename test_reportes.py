"""Pruebas de los paneles: filtros de fecha, histogramas y ocupación."""

from datetime import datetime

import pytest
from openpyxl import load_workbook

from reclutamiento.application.services.reportes_service import (
    ReportesService, clasificar_ocupacion, contar_por, filtrar_por_rango, inicio_semana,
    intervalo_para_rango, kpis_ocupacion, top_con_otros
)
from reclutamiento.domain.models.enums import EstadoCliente, EstadoDocumental, ProximoEscenario
from reclutamiento.domain.models.trabajador import Trabajador

# Miércoles
AHORA = datetime(2024, 7, 24, 15, 30)


def test_inicio_semana_es_lunes():
    assert inicio_semana(AHORA) == datetime(2024, 7, 22)
    assert inicio_semana(datetime(2024, 7, 22, 0, 0)) == datetime(2024, 7, 22)


def test_intervalos_de_fecha():
    assert intervalo_para_rango('all', AHORA) is None
    assert intervalo_para_rango('this_week', AHORA) == (datetime(2024, 7, 22), datetime(2024, 7, 29))
    assert intervalo_para_rango('last_week', AHORA) == (datetime(2024, 7, 15), datetime(2024, 7, 22))
    assert intervalo_para_rango('last_4_weeks', AHORA) == (datetime(2024, 7, 1), datetime(2024, 7, 29))
    with pytest.raises(ValueError):
        intervalo_para_rango('ayer', AHORA)


def test_filtrar_por_rango(almacen_demo):
    trabajadores = almacen_demo.trabajadores
    assert {t.id for t in filtrar_por_rango(trabajadores, 'this_week', AHORA)} == {'trab-1', 'trab-2'}
    assert {t.id for t in filtrar_por_rango(trabajadores, 'last_week', AHORA)} == {'trab-3', 'trab-4', 'trab-5'}
    assert len(filtrar_por_rango(trabajadores, 'last_4_weeks', AHORA)) == 10
    assert len(filtrar_por_rango(trabajadores, 'all', AHORA)) == 10


def test_top_con_otros_agrupa_el_resto():
    datos = [{'name': f'Especialidad {i}', 'value': i + 1} for i in range(15)]
    resultado = top_con_otros(datos, 10)
    assert len(resultado) == 11
    assert resultado[-1] == {'name': 'Otros', 'value': 1 + 2 + 3 + 4 + 5}
    assert resultado[0] == {'name': 'Especialidad 14', 'value': 15}


def test_top_con_otros_sin_exceso_no_agrega_otros():
    datos = [{'name': 'a', 'value': 1}, {'name': 'b', 'value': 3}]
    assert top_con_otros(datos, 10) == [{'name': 'b', 'value': 3}, {'name': 'a', 'value': 1}]


def test_top_con_otros_omite_otros_en_cero():
    datos = [{'name': str(i), 'value': 0 if i >= 2 else 5} for i in range(4)]
    resultado = top_con_otros(datos, 2)
    assert [d['name'] for d in resultado] == ['0', '1']


def test_contar_por_usa_el_valor_del_estado():
    trabajadores = [Trabajador(id='a'), Trabajador(id='b'), Trabajador(id='c', estado_documental=EstadoDocumental.VALIDADO)]
    assert contar_por(trabajadores, 'estado_documental') == [
        {'name': 'En revisión documental', 'value': 2},
        {'name': 'Validado', 'value': 1},
    ]


def _casos_ocupacion():
    return [
        Trabajador(id='contratado', estado_documental=EstadoDocumental.ASIGNADO, proyecto_asignado='p',
                   estado_cliente=EstadoCliente.APROBADO, proximo_escenario=ProximoEscenario.CONTRATADO),
        Trabajador(id='libre', estado_documental=EstadoDocumental.VALIDADO),
        Trabajador(id='rechazado', estado_documental=EstadoDocumental.VALIDADO,
                   estado_cliente=EstadoCliente.RECHAZADO, disponible=True),
        Trabajador(id='revision'),
        Trabajador(id='proceso', estado_documental=EstadoDocumental.ASIGNADO, proyecto_asignado='p',
                   estado_cliente=EstadoCliente.PENDIENTE, proximo_escenario=ProximoEscenario.ENTREVISTA),
        Trabajador(id='doc_rechazado', estado_documental=EstadoDocumental.RECHAZADO_DOCUMENTAL),
    ]


def test_clasificacion_de_ocupacion():
    clases = {t.id: clasificar_ocupacion(t) for t in _casos_ocupacion()}
    assert clases == {
        'contratado': 'contratado',
        'libre': 'libre',
        'rechazado': 'libre',
        'revision': 'en_proceso',
        'proceso': 'en_proceso',
        'doc_rechazado': 'en_proceso',
    }


@pytest.mark.parametrize('cantidad', [0, 1, 3, 6])
def test_ocupacion_es_una_particion(cantidad):
    trabajadores = _casos_ocupacion()[:cantidad]
    kpis = kpis_ocupacion(trabajadores)
    assert kpis['ocupados'] + kpis['libres'] + kpis['en_proceso'] == len(trabajadores)


def test_dashboard_admin_con_datos_de_demostracion(almacen_demo):
    panel = ReportesService(almacen_demo).dashboard_admin('all', AHORA)
    assert panel['total_trabajadores'] == 10
    assert panel['kpis'] == {'ocupados': 1, 'libres': 2, 'en_proceso': 7}
    especialidades = {d['name']: d['value'] for d in panel['por_especialidad']}
    assert especialidades['Soldador'] == 3
    proyecto = panel['estado_proyectos'][0]
    assert proyecto['id'] == 'pro-1'
    assert proyecto['requeridos'] == 500
    assert proyecto['aprobados'] == 3


def test_listado_de_trabajadores_por_pestana(almacen_demo):
    reportes = ReportesService(almacen_demo)
    assert {f['id'] for f in reportes.listado_trabajadores('ingresados')} == {'trab-1', 'trab-6'}
    assert {f['id'] for f in reportes.listado_trabajadores('libres')} == {'trab-5', 'trab-9'}
    assert {f['id'] for f in reportes.listado_trabajadores('ocupados')} == {'trab-3'}
    assert [f['id'] for f in reportes.listado_trabajadores('ingresados', 'ana')] == ['trab-6']
    with pytest.raises(ValueError):
        reportes.listado_trabajadores('todos')


def test_excel_de_trabajadores(almacen_demo):
    stream = ReportesService(almacen_demo).generar_excel_trabajadores('libres')
    hoja = load_workbook(stream).active
    assert hoja.cell(row=1, column=2).value == 'Nombre'
    nombres = {hoja.cell(row=fila, column=2).value for fila in range(2, hoja.max_row + 1)}
    assert nombres == {'Jose Fernandez', 'Roberto Carlos'}


def test_tablero_de_proyecto(almacen_demo):
    tablero = ReportesService(almacen_demo).tablero_proyecto('pro-1')
    columnas = {nombre: {f['id'] for f in filas} for nombre, filas in tablero['columnas'].items()}
    assert columnas == {
        'paraRevision': {'trab-2', 'trab-8', 'trab-10'},
        'enEntrevista': set(),
        'enEvaluacion': {'trab-4'},
        'listosParaContratar': {'trab-7'},
        'carpetasSolicitadas': set(),
    }
    assert [f['id'] for f in tablero['rechazados']] == ['trab-5']
    assert tablero['completitud']['total_aprobados'] == 1


def test_historial_de_rechazos_ordenado_por_nombre(almacen_demo):
    almacen_demo.actualizar_trabajador(
        almacen_demo.obtener_trabajador('trab-6').copiar(
            estado_documental=EstadoDocumental.RECHAZADO_DOCUMENTAL, motivo_rechazo_documental='Falta CV'
        )
    )
    historial = ReportesService(almacen_demo).historial_rechazos()
    assert [f['nombre'] for f in historial] == ['Ana Torres', 'Jose Fernandez']
    assert historial[0]['tipoRechazo'] == 'Documental'
    assert historial[1]['tipoRechazo'] == 'Cliente'
    assert historial[1]['ultimoProyectoNombre'] == 'Ampliación Planta Norte'


def test_dashboard_usuario(almacen_demo):
    reportes = ReportesService(almacen_demo)
    panel = reportes.dashboard_usuario(almacen_demo.proyectos)
    assert panel['total_proyectos'] == 1
    assert panel['total_vacantes'] == 500
    assert panel['total_aprobados'] == 1
    assert panel['total_candidatos'] == 6
