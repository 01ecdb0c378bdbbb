# RUTA: reclutamiento/decorators.py

from functools import wraps

from flask import current_app, redirect
from flask_login import current_user

from reclutamiento.application.services.sesion_service import resolver_acceso


def role_required(rol):
    """
    Decorador para restringir una ruta a un único rol.
    Sin sesión se redirige al login de ese rol; con otro rol, a su propio panel.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            destino = resolver_acceso(current_user, rol)
            if destino is not None:
                if current_user.is_authenticated:
                    current_app.logger.warning(
                        f"SEGURIDAD: {current_user.get_id()} intentó acceder a una sección de {rol.value}"
                    )
                return redirect(destino)
            return f(*args, **kwargs)
        return decorated_function
    return decorator
