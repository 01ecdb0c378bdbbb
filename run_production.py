#!/usr/bin/env python
"""
Script para ejecutar la plataforma en producción usando Waitress.

Uso:
    python run_production.py              # Puerto por defecto: 5001
    python run_production.py 8080         # Puerto personalizado: 8080
    python run_production.py 0.0.0.0 8080 # Host y puerto personalizados
"""

import sys
from waitress import serve
from reclutamiento import create_app

app = create_app()

if __name__ == "__main__":
    host = "localhost"
    port = 5001

    # Permitir personalización desde CLI
    try:
        if len(sys.argv) == 2:
            port = int(sys.argv[1])
        elif len(sys.argv) >= 3:
            host = sys.argv[1]
            port = int(sys.argv[2])
    except ValueError:
        print("Error: El puerto debe ser un número válido")
        print("Uso: python run_production.py [puerto] o python run_production.py [host] [puerto]")
        sys.exit(1)

    print(f"""
    ==============================================================
           PLATAFORMA DE RECLUTAMIENTO - SERVIDOR DE PRODUCCIÓN
    ==============================================================
    Servidor: Waitress WSGI
    Host: {host}
    Puerto: {port}
    HTTPS: No (usar con proxy reverso como Nginx)

    Accede a: http://{host}:{port}
    Presiona CTRL+C para detener el servidor
    """)

    serve(
        app,
        host=host,
        port=port,
        threads=8,           # Número de threads para manejar conexiones
        channel_timeout=300, # Timeout de conexión (5 minutos)
        log_socket_errors=False,
    )
