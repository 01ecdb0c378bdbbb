"""Pruebas de la importación masiva de trabajadores."""

from datetime import date

import pytest

from reclutamiento.application.services.importacion_service import (
    ImportacionService, calcular_edad, es_importable, presencia_documentos, validar_registros
)
from reclutamiento.domain.exceptions import TransicionInvalidaError
from reclutamiento.domain.models.enums import EstadoDocumental

DOCUMENTO = 'data:application/pdf;base64,JVBERi0xLjQK'


def _registro(nombre, **documentos):
    return {'nombre': nombre, 'rut': '11.111.111-1', 'fechaNacimiento': '1990-06-15', 'documentos': documentos}


def _completo(nombre, **extra):
    return _registro(nombre, cv=DOCUMENTO, cedula=DOCUMENTO, antecedentes=DOCUMENTO, **extra)


def test_presencia_de_documentos():
    presencia = presencia_documentos(_registro('x', cv=DOCUMENTO, certificado=DOCUMENTO))
    assert presencia == {'cv': True, 'cedula': False, 'antecedentes': False, 'certificado': True}


def test_certificado_es_opcional():
    assert es_importable(_completo('x'))
    assert not es_importable(_registro('x', cv=DOCUMENTO, cedula=DOCUMENTO, certificado=DOCUMENTO))


def test_calcular_edad_por_anio_calendario():
    assert calcular_edad('1990-12-31', date(2024, 1, 1)) == 34
    assert calcular_edad('no es fecha', date(2024, 1, 1)) == 0
    assert calcular_edad(None) == 0


def test_previsualizar_marca_registros_con_error(almacen_demo):
    vista = ImportacionService(almacen_demo).previsualizar([_completo('Ok'), _registro('Sin CV', cedula=DOCUMENTO)])
    assert [fila['tiene_error'] for fila in vista] == [False, True]


def test_importar_omite_registros_incompletos(almacen_demo):
    total = len(almacen_demo.trabajadores)
    registros = [_completo('Nuevo Uno'), _registro('Sin Documentos'), _completo('Nuevo Dos', certificado=DOCUMENTO)]
    resultado = ImportacionService(almacen_demo).importar(registros, hoy=date(2024, 8, 1))

    assert resultado['exitosos'] == 2
    assert resultado['omitidos'] == 1
    assert len(almacen_demo.trabajadores) == total + 2

    uno, dos = resultado['creados']
    assert uno.numero == 11 and dos.numero == 12
    assert uno.id.startswith('trab-imp-') and uno.id != dos.id
    assert uno.estado_documental == EstadoDocumental.EN_REVISION
    assert uno.edad == 34
    assert uno.ciudad == 'N/A'
    assert uno.es_prueba is False
    assert set(dos.documentos) == {'cv', 'cedula', 'antecedentes', 'certificado'}


def test_importar_sin_registros_validos_falla(almacen_demo):
    servicio = ImportacionService(almacen_demo)
    with pytest.raises(TransicionInvalidaError):
        servicio.importar([])
    with pytest.raises(TransicionInvalidaError):
        servicio.importar([_registro('Incompleto', cv=DOCUMENTO)])
    assert len(almacen_demo.trabajadores) == 10


@pytest.mark.parametrize('registros', [['x'], [_completo('Ok'), 3], 'no es lista', [{'documentos': 'cv'}]])
def test_registros_mal_formados_se_rechazan(almacen_demo, registros):
    servicio = ImportacionService(almacen_demo)
    with pytest.raises(TransicionInvalidaError):
        validar_registros(registros)
    with pytest.raises(TransicionInvalidaError):
        servicio.previsualizar(registros)
    with pytest.raises(TransicionInvalidaError):
        servicio.importar(registros)
    assert len(almacen_demo.trabajadores) == 10
