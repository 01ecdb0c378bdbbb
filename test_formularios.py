"""Pruebas de los validadores de formularios."""

from reclutamiento.application.forms import LoginForm, MotivoRechazoForm, PerfilTrabajadorForm


def _perfil(**cambios):
    datos = {
        'nombre_completo': 'Nuevo Trabajador', 'rut': '20.123.456-K', 'telefono': '+56 9 1234 5678',
        'fecha_nacimiento': '1995-03-10', 'ciudad': 'Calama', 'nacionalidad': 'Chilena',
        'especialidad': 'Soldador',
    }
    datos.update(cambios)
    return datos


def test_perfil_valido(app):
    with app.test_request_context(method='POST', json=_perfil()):
        assert PerfilTrabajadorForm().validate()


def test_perfil_otra_especialidad_obligatoria(app):
    with app.test_request_context(method='POST', json=_perfil(especialidad='Otro')):
        form = PerfilTrabajadorForm()
        assert not form.validate()
        assert 'otra_especialidad' in form.errors


def test_perfil_menor_de_edad(app):
    with app.test_request_context(method='POST', json=_perfil(fecha_nacimiento='2020-01-01')):
        form = PerfilTrabajadorForm()
        assert not form.validate()
        assert 'fecha_nacimiento' in form.errors


def test_perfil_rut_invalido(app):
    with app.test_request_context(method='POST', json=_perfil(rut='12345678')):
        form = PerfilTrabajadorForm()
        assert not form.validate()
        assert 'rut' in form.errors


def test_motivo_en_blanco(app):
    with app.test_request_context(method='POST', json={'motivo': '   '}):
        assert not MotivoRechazoForm().validate()


def test_login_exige_email_valido(app):
    with app.test_request_context(method='POST', json={'email': 'no-es-email', 'password': 'x'}):
        form = LoginForm()
        assert not form.validate()
        assert 'email' in form.errors
