"""WSGI entrypoint for deploying the fichepaie backend on Passenger hosts."""

from fichepaie.backend.app import create_app

# cPanel's Passenger expects a module-level variable named ``application``.
application = create_app()
