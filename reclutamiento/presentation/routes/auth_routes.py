# RUTA: reclutamiento/presentation/routes/auth_routes.py

from flask import Blueprint, redirect, current_app
from flask_login import login_user, logout_user, current_user

from reclutamiento import limiter
from reclutamiento.application.forms import LoginForm
from reclutamiento.application.services.sesion_service import ruta_dashboard, ruta_login
from reclutamiento.domain.models.enums import Rol
from reclutamiento.presentation.routes.respuestas import error_json, errores_formulario, respuesta_json

auth_bp = Blueprint('auth', __name__)


def _procesar_login(rol):
    """Login contra la colección de cuentas del rol; el rol lo fija la ruta, no el formulario."""
    if current_user.is_authenticated and current_user.rol == rol:
        return redirect(ruta_dashboard(rol))

    form = LoginForm()
    if not form.is_submitted():
        return respuesta_json({'rol': rol.value, 'login': ruta_login(rol)})
    if not form.validate():
        return errores_formulario(form)

    sesion_service = current_app.config['SESION_SERVICE']
    usuario = sesion_service.login(form.email.data, form.password.data, rol)
    if usuario is None:
        return error_json('Email o contraseña incorrectos.', 401)

    # Una sesión de otro rol se reemplaza por la nueva
    logout_user()
    login_user(usuario, remember=form.remember_me.data)
    return respuesta_json({'usuario': usuario.to_dict(), 'redirect': ruta_dashboard(rol)})


@auth_bp.route('/admin/login', methods=['GET', 'POST'])
# Seguridad: Aplicar un límite de intentos para prevenir ataques de fuerza bruta.
@limiter.limit("20 per minute")
def login_admin():
    return _procesar_login(Rol.ADMIN)


@auth_bp.route('/revisor/login', methods=['GET', 'POST'])
@limiter.limit("20 per minute")
def login_revisor():
    return _procesar_login(Rol.REVISOR)


@auth_bp.route('/usuario/login', methods=['GET', 'POST'])
@limiter.limit("20 per minute")
def login_usuario():
    return _procesar_login(Rol.USUARIO)


@auth_bp.route('/trabajador/login', methods=['GET', 'POST'])
@limiter.limit("20 per minute")
def login_trabajador():
    return _procesar_login(Rol.TRABAJADOR)


@auth_bp.route('/logout', methods=['GET', 'POST'])
def logout():
    """Cierra la sesión y vuelve al login del rol que la tenía abierta."""
    destino = ruta_login(current_user.rol) if current_user.is_authenticated else '/'
    if current_user.is_authenticated:
        current_app.logger.info(f"Cierre de sesión: {current_user.get_id()}")
    logout_user()
    return redirect(destino)
