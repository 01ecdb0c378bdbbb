# RUTA: reclutamiento/__init__.py

import logging
from logging.handlers import RotatingFileHandler
import os
from flask import Flask, redirect, current_app, jsonify
from flask_login import LoginManager, current_user
from flask_wtf.csrf import CSRFProtect, generate_csrf

# Seguridad: Importar las extensiones
from flask_talisman import Talisman
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from .config import Config
from .core.security import crear_verificador
from .domain.models.enums import Rol
from .infrastructure.persistence.almacen import AlmacenEntidades
from .infrastructure.persistence.datos_iniciales import generar_datos_iniciales
from .infrastructure.persistence.json_snapshot_repository import JsonSnapshotRepository
from .infrastructure.persistence.memoria_snapshot_repository import MemoriaSnapshotRepository
from .application.services.asignacion_service import AsignacionService
from .application.services.ciclo_vida_service import CicloVidaService
from .application.services.cliente_service import ClienteService
from .application.services.cuentas_service import CuentasService
from .application.services.importacion_service import ImportacionService
from .application.services.proyecto_service import ProyectoService
from .application.services.reportes_service import ReportesService
from .application.services.respaldo_service import RespaldoService
from .application.services.sesion_service import SesionService, ruta_dashboard, ruta_login

# Inicialización de extensiones de Flask (sin la app)
login_manager = LoginManager()
login_manager.login_view = 'auth.login_usuario'
# Cada sección redirige al login de su propio rol
login_manager.blueprint_login_views = {
    'admin': 'auth.login_admin',
    'revisor': 'auth.login_revisor',
    'usuario': 'auth.login_usuario',
    'trabajador': 'auth.login_trabajador',
}
login_manager.login_message = "Por favor, inicie sesión para acceder a esta página."
login_manager.login_message_category = "info"
csrf = CSRFProtect()
# Seguridad: Crear instancias de Limiter y Talisman fuera de la factoría
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per day", "50 per hour"] # Límites por defecto para todas las rutas
)
talisman = Talisman()


@login_manager.user_loader
def load_user(user_id):
    sesion_service = current_app.config.get('SESION_SERVICE')
    if sesion_service:
        return sesion_service.cargar_sesion(user_id)
    return None


def configure_logging(app):
    """Configura el sistema de logging para la aplicación."""
    if not app.debug and not app.testing:
        log_dir = app.config.get('LOG_DIR', 'logs')
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)

        # Usar delay=True para evitar problemas en Windows con archivo bloqueado
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, 'app.log'),
            maxBytes=50*1024*1024,  # 50 MB
            backupCount=5,
            delay=True  # No crear el archivo hasta el primer log
        )

        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))

        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        # Los servicios usan logging.getLogger(__name__) bajo el paquete 'reclutamiento'
        paquete_logger = logging.getLogger('reclutamiento')
        paquete_logger.addHandler(file_handler)
        paquete_logger.setLevel(logging.INFO)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Aplicación iniciada')


def _crear_repositorio(app):
    ruta = app.config.get('DATA_FILE')
    if ruta:
        return JsonSnapshotRepository(ruta)
    return MemoriaSnapshotRepository()


def create_app(config_class=Config, repositorio=None):
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)

    # Seguridad: fuera de desarrollo y pruebas, la SECRET_KEY es obligatoria.
    if not app.config.get('SECRET_KEY') and not app.debug and not app.testing:
        raise ValueError("CRITICAL: La variable de entorno SECRET_KEY no está configurada para el entorno de producción.")
    if not app.config.get('SECRET_KEY'):
        app.config['SECRET_KEY'] = 'clave-de-desarrollo'

    # Configurar Logging
    configure_logging(app)

    # Inicializar todas las extensiones con la app
    login_manager.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)

    # Configuración de la Política de Seguridad de Contenido (CSP)
    csp = {
        'default-src': "'self'",
        'img-src': [
            "'self'",
            'data:',
        ],
    }

    talisman.init_app(
        app,
        content_security_policy=csp,
        force_https=False,  # HTTPS lo termina el proxy reverso
        session_cookie_secure=app.config.get('SESSION_COOKIE_SECURE', False),
        permissions_policy={},
    )

    with app.app_context():
        # --- Inyección de Dependencias ---
        repositorio = repositorio or _crear_repositorio(app)
        datos_iniciales = generar_datos_iniciales() if app.config.get('SEED_DATA') else None
        almacen = AlmacenEntidades.desde_repositorio(repositorio, datos_iniciales)
        verificador = crear_verificador(app.config.get('CREDENTIAL_VERIFIER'))

        app.config['ALMACEN'] = almacen
        app.config['SESION_SERVICE'] = SesionService(almacen, verificador)
        app.config['CICLO_VIDA_SERVICE'] = CicloVidaService(almacen)
        app.config['ASIGNACION_SERVICE'] = AsignacionService(almacen)
        app.config['REPORTES_SERVICE'] = ReportesService(almacen, app.config.get('HISTOGRAMA_TOP_N', 10))
        app.config['IMPORTACION_SERVICE'] = ImportacionService(almacen)
        app.config['PROYECTO_SERVICE'] = ProyectoService(almacen)
        app.config['CLIENTE_SERVICE'] = ClienteService(almacen)
        app.config['CUENTAS_SERVICE'] = CuentasService(almacen)
        app.config['RESPALDO_SERVICE'] = RespaldoService(almacen)

        # Seguridad: Mover la importación de blueprints aquí para evitar importaciones circulares
        from .presentation.routes.auth_routes import auth_bp
        from .presentation.routes.admin_routes import admin_bp
        from .presentation.routes.revisor_routes import revisor_bp
        from .presentation.routes.usuario_routes import usuario_bp
        from .presentation.routes.trabajador_routes import trabajador_bp
        from .presentation.routes.error_routes import error_bp
        # Registrar Blueprints
        app.register_blueprint(auth_bp)
        app.register_blueprint(admin_bp)
        app.register_blueprint(revisor_bp)
        app.register_blueprint(usuario_bp)
        app.register_blueprint(trabajador_bp)
        app.register_blueprint(error_bp)

        @app.route('/')
        def index():
            # Si está autenticado, redirige a su panel; si no, muestra los accesos por rol
            if current_user.is_authenticated:
                return redirect(ruta_dashboard(current_user.rol))
            return jsonify({
                'mensaje': 'Plataforma de Reclutamiento',
                'accesos': {rol.value: ruta_login(rol) for rol in Rol},
            })

        @app.route('/health')
        def health():
            """Endpoint de salud para verificar que el servidor está activo"""
            return jsonify({'status': 'ok', 'message': 'Servidor activo'})

        @app.route('/csrf-token')
        def csrf_token():
            """Token CSRF para clientes que envían JSON."""
            return jsonify({'csrf_token': generate_csrf()})

    return app
