# Fixtures compartidas por las pruebas de la plataforma.

import pytest

from reclutamiento import create_app
from reclutamiento.config import TestingConfig
from reclutamiento.infrastructure.persistence.almacen import AlmacenEntidades
from reclutamiento.infrastructure.persistence.datos_iniciales import PASSWORD_DEMO, generar_datos_iniciales
from reclutamiento.infrastructure.persistence.memoria_snapshot_repository import MemoriaSnapshotRepository


@pytest.fixture
def app():
    """App con configuración de pruebas: datos de demostración en memoria y sin CSRF."""
    app = create_app(TestingConfig)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def almacen(app):
    return app.config['ALMACEN']


@pytest.fixture
def almacen_demo():
    """Almacén independiente de Flask, con los datos de demostración."""
    return AlmacenEntidades.desde_repositorio(MemoriaSnapshotRepository(), generar_datos_iniciales())


@pytest.fixture
def login(client):
    def _login(slug, email='mail@mail.com', password=PASSWORD_DEMO):
        return client.post(f'/{slug}/login', json={'email': email, 'password': password})
    return _login
