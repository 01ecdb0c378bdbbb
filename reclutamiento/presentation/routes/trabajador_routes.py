# RUTA: reclutamiento/presentation/routes/trabajador_routes.py

from flask import Blueprint, current_app, redirect, request
from flask_login import current_user, login_required, login_user

from reclutamiento import limiter
from reclutamiento.application.forms import PerfilTrabajadorForm, RegistroCuentaForm
from reclutamiento.application.services.sesion_service import ruta_dashboard
from reclutamiento.decorators import role_required
from reclutamiento.domain.models.cuentas import UsuarioSesion
from reclutamiento.domain.models.enums import Rol
from reclutamiento.presentation.routes.respuestas import datos_peticion, errores_formulario, respuesta_json

trabajador_bp = Blueprint('trabajador', __name__, url_prefix='/trabajador')


@trabajador_bp.route('/registro', methods=['POST'])
@limiter.limit("10 per minute")
def registro():
    """Crea la cuenta, inicia sesión y deja el perfil pendiente de completar."""
    if current_user.is_authenticated and current_user.rol == Rol.TRABAJADOR:
        return redirect(ruta_dashboard(Rol.TRABAJADOR))

    form = RegistroCuentaForm()
    if not form.validate_on_submit():
        return errores_formulario(form)
    cuentas_service = current_app.config['CUENTAS_SERVICE']
    trabajador = cuentas_service.registrar_cuenta_trabajador(form.email.data, form.password.data)

    credencial = current_app.config['ALMACEN'].obtener_credencial(trabajador.id)
    login_user(UsuarioSesion(credencial, Rol.TRABAJADOR))
    return respuesta_json({
        'mensaje': 'Cuenta creada. Complete su perfil para continuar.',
        'trabajador': trabajador.to_dict(),
        'redirect': '/trabajador/perfil',
    }, 201)


@trabajador_bp.route('/', strict_slashes=False)
@login_required
@role_required(Rol.TRABAJADOR)
def dashboard():
    trabajador = current_app.config['ALMACEN'].requerir('trabajadores', current_user.id, 'Trabajador')
    reportes_service = current_app.config['REPORTES_SERVICE']
    datos = reportes_service.fila_trabajador(trabajador)
    return respuesta_json({'trabajador': datos, 'perfil_completo': bool(trabajador.rut)})


@trabajador_bp.route('/perfil', methods=['GET', 'POST'])
@login_required
@role_required(Rol.TRABAJADOR)
def perfil():
    almacen = current_app.config['ALMACEN']
    if request.method == 'GET':
        trabajador = almacen.requerir('trabajadores', current_user.id, 'Trabajador')
        return respuesta_json({'trabajador': trabajador.to_dict()})

    form = PerfilTrabajadorForm()
    if not form.validate_on_submit():
        return errores_formulario(form)
    datos = {
        'nombreCompleto': form.nombre_completo.data,
        'rut': form.rut.data,
        'telefono': form.telefono.data,
        'fechaNacimiento': form.fecha_nacimiento.data,
        'ciudad': form.ciudad.data,
        'nacionalidad': form.nacionalidad.data,
        'especialidad': form.especialidad.data,
        'otraEspecialidad': form.otra_especialidad.data,
        # Los documentos llegan como data URLs en el cuerpo JSON
        'documentos': datos_peticion().get('documentos') or {},
    }
    cuentas_service = current_app.config['CUENTAS_SERVICE']
    trabajador = cuentas_service.completar_perfil(current_user.id, datos)
    return respuesta_json({'mensaje': 'Perfil actualizado.', 'trabajador': trabajador.to_dict()})
