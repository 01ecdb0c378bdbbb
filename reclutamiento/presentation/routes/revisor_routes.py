# RUTA: reclutamiento/presentation/routes/revisor_routes.py

from flask import Blueprint, current_app, request
from flask_login import current_user, login_required

from reclutamiento.application.forms import AsignacionProyectoForm, MotivoRechazoForm
from reclutamiento.decorators import role_required
from reclutamiento.domain.models.enums import Rol
from reclutamiento.presentation.routes.respuestas import datos_peticion, errores_formulario, respuesta_json

revisor_bp = Blueprint('revisor', __name__, url_prefix='/revisor')


@revisor_bp.route('/', strict_slashes=False)
@login_required
@role_required(Rol.REVISOR)
def dashboard():
    reportes_service = current_app.config['REPORTES_SERVICE']
    return respuesta_json(reportes_service.dashboard_revisor())


# ===== VALIDACIÓN DOCUMENTAL =====

@revisor_bp.route('/validacion')
@login_required
@role_required(Rol.REVISOR)
def bandeja_validacion():
    """Por defecto solo los trabajadores asignados al revisor; ?todos=1 muestra todos."""
    revisor_id = None if request.args.get('todos') else current_user.id
    reportes_service = current_app.config['REPORTES_SERVICE']
    return respuesta_json(reportes_service.bandeja_validacion(revisor_id))


@revisor_bp.route('/trabajadores/<trabajador_id>/validar', methods=['POST'])
@login_required
@role_required(Rol.REVISOR)
def validar(trabajador_id):
    ciclo_vida_service = current_app.config['CICLO_VIDA_SERVICE']
    trabajador = ciclo_vida_service.validar_documentos(trabajador_id)
    return respuesta_json({'mensaje': 'Documentación validada.', 'trabajador': trabajador.to_dict()})


@revisor_bp.route('/trabajadores/<trabajador_id>/rechazar', methods=['POST'])
@login_required
@role_required(Rol.REVISOR)
def rechazar_documentos(trabajador_id):
    form = MotivoRechazoForm()
    if not form.validate_on_submit():
        return errores_formulario(form)
    ciclo_vida_service = current_app.config['CICLO_VIDA_SERVICE']
    trabajador = ciclo_vida_service.rechazar_documentos(trabajador_id, form.motivo.data)
    return respuesta_json({'mensaje': 'Documentación rechazada.', 'trabajador': trabajador.to_dict()})


@revisor_bp.route('/trabajadores/<trabajador_id>/revalidar', methods=['POST'])
@login_required
@role_required(Rol.REVISOR)
def revalidar(trabajador_id):
    ciclo_vida_service = current_app.config['CICLO_VIDA_SERVICE']
    trabajador = ciclo_vida_service.solicitar_revalidacion(trabajador_id)
    return respuesta_json({'mensaje': 'Trabajador devuelto a revisión documental.', 'trabajador': trabajador.to_dict()})


@revisor_bp.route('/rechazados')
@login_required
@role_required(Rol.REVISOR)
def rechazados():
    reportes_service = current_app.config['REPORTES_SERVICE']
    return respuesta_json({'rechazados': reportes_service.historial_rechazos()})


# ===== ASIGNACIÓN A PROYECTOS =====

@revisor_bp.route('/asignacion')
@login_required
@role_required(Rol.REVISOR)
def asignacion():
    termino = request.args.get('q', '').strip() or None
    asignacion_service = current_app.config['ASIGNACION_SERVICE']
    reportes_service = current_app.config['REPORTES_SERVICE']
    return respuesta_json({
        'disponibles': [reportes_service.fila_trabajador(t) for t in asignacion_service.pool_libre(termino)],
        'proyectos': [
            {'id': p.id, 'nombre': p.nombre, 'cliente': reportes_service.nombre_cliente(p.cliente_id)}
            for p in asignacion_service.proyectos_asignables()
        ],
    })


@revisor_bp.route('/trabajadores/<trabajador_id>/asignar', methods=['POST'])
@login_required
@role_required(Rol.REVISOR)
def asignar(trabajador_id):
    form = AsignacionProyectoForm()
    if not form.validate_on_submit():
        return errores_formulario(form)
    ciclo_vida_service = current_app.config['CICLO_VIDA_SERVICE']
    trabajador = ciclo_vida_service.asignar_a_proyecto(trabajador_id, form.proyecto_id.data)
    return respuesta_json({'mensaje': 'Trabajador asignado al proyecto.', 'trabajador': trabajador.to_dict()})


# ===== SEGUIMIENTO DE PROYECTOS =====

@revisor_bp.route('/proyectos')
@login_required
@role_required(Rol.REVISOR)
def proyectos():
    sesion_service = current_app.config['SESION_SERVICE']
    return respuesta_json({'proyectos': [p.to_dict() for p in sesion_service.proyectos_visibles(current_user)]})


@revisor_bp.route('/proyectos/<proyecto_id>')
@login_required
@role_required(Rol.REVISOR)
def tablero(proyecto_id):
    reportes_service = current_app.config['REPORTES_SERVICE']
    return respuesta_json(reportes_service.tablero_proyecto(proyecto_id))


@revisor_bp.route('/proyectos/<proyecto_id>/acreditacion', methods=['POST'])
@login_required
@role_required(Rol.REVISOR)
def enviar_a_acreditacion(proyecto_id):
    ciclo_vida_service = current_app.config['CICLO_VIDA_SERVICE']
    actualizados = ciclo_vida_service.enviar_a_acreditacion(proyecto_id, datos_peticion().get('ids'))
    return respuesta_json({
        'mensaje': f"{len(actualizados)} trabajadores enviados a acreditación.",
        'actualizados': [t.id for t in actualizados],
    })


@revisor_bp.route('/proyectos/<proyecto_id>/contratados', methods=['POST'])
@login_required
@role_required(Rol.REVISOR)
def marcar_contratados(proyecto_id):
    ciclo_vida_service = current_app.config['CICLO_VIDA_SERVICE']
    actualizados = ciclo_vida_service.marcar_contratados(proyecto_id, datos_peticion().get('ids'))
    return respuesta_json({
        'mensaje': f"{len(actualizados)} trabajadores marcados como contratados.",
        'actualizados': [t.id for t in actualizados],
    })
