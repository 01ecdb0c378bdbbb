# RUTA: reclutamiento/presentation/routes/usuario_routes.py

from flask import Blueprint, current_app
from flask_login import current_user, login_required

from reclutamiento.application.forms import MotivoRechazoForm
from reclutamiento.decorators import role_required
from reclutamiento.domain.models.enums import Rol
from reclutamiento.presentation.routes.respuestas import datos_peticion, errores_formulario, respuesta_json

usuario_bp = Blueprint('usuario', __name__, url_prefix='/usuario')


def _requerir_proyecto_visible(proyecto_id):
    sesion_service = current_app.config['SESION_SERVICE']
    if not sesion_service.puede_ver_proyecto(current_user, proyecto_id):
        current_app.logger.warning(f"SEGURIDAD: {current_user.get_id()} intentó ver el proyecto {proyecto_id}")
        raise PermissionError("No tiene acceso a este proyecto.")


@usuario_bp.route('/', strict_slashes=False)
@login_required
@role_required(Rol.USUARIO)
def dashboard():
    sesion_service = current_app.config['SESION_SERVICE']
    reportes_service = current_app.config['REPORTES_SERVICE']
    proyectos = sesion_service.proyectos_visibles(current_user)
    datos = reportes_service.dashboard_usuario(proyectos)
    cliente = current_app.config['ALMACEN'].obtener_cliente(current_user.cliente_id)
    datos['cliente'] = {'id': cliente.id, 'nombre': cliente.nombre, 'logoUrl': cliente.logo_url} if cliente else None
    return respuesta_json(datos)


@usuario_bp.route('/proyectos/<proyecto_id>')
@login_required
@role_required(Rol.USUARIO)
def tablero(proyecto_id):
    _requerir_proyecto_visible(proyecto_id)
    reportes_service = current_app.config['REPORTES_SERVICE']
    return respuesta_json(reportes_service.tablero_proyecto(proyecto_id))


@usuario_bp.route('/trabajadores/<trabajador_id>/avanzar', methods=['POST'])
@login_required
@role_required(Rol.USUARIO)
def avanzar(trabajador_id):
    ciclo_vida_service = current_app.config['CICLO_VIDA_SERVICE']
    trabajador = ciclo_vida_service.avanzar_etapa(trabajador_id, current_user)
    return respuesta_json({'mensaje': trabajador.ultima_accion, 'trabajador': trabajador.to_dict()})


@usuario_bp.route('/trabajadores/<trabajador_id>/rechazar', methods=['POST'])
@login_required
@role_required(Rol.USUARIO)
def rechazar(trabajador_id):
    form = MotivoRechazoForm()
    if not form.validate_on_submit():
        return errores_formulario(form)
    ciclo_vida_service = current_app.config['CICLO_VIDA_SERVICE']
    trabajador = ciclo_vida_service.rechazar_en_etapa(trabajador_id, form.motivo.data, current_user)
    return respuesta_json({'mensaje': 'Candidato rechazado.', 'trabajador': trabajador.to_dict()})


@usuario_bp.route('/proyectos/<proyecto_id>/solicitar-carpetas', methods=['POST'])
@login_required
@role_required(Rol.USUARIO)
def solicitar_carpetas(proyecto_id):
    """Sin 'ids' en el cuerpo se solicitan todos los candidatos listos para contratar."""
    ciclo_vida_service = current_app.config['CICLO_VIDA_SERVICE']
    actualizados = ciclo_vida_service.solicitar_carpetas(proyecto_id, datos_peticion().get('ids'), current_user)
    return respuesta_json({
        'mensaje': f"Carpeta de contratación solicitada para {len(actualizados)} candidatos.",
        'actualizados': [t.id for t in actualizados],
    })
