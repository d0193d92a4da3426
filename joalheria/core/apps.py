# joalheria/core/apps.py

from django.apps import AppConfig

class CoreConfig(AppConfig):
    # O nome completo do path da aplicação
    name = 'joalheria.core'
    label = 'core'
    verbose_name = 'Domínio da Joalheria (Core)'

    # A camada Core não possui modelos; existe como app para os management commands.
    default_auto_field = 'django.db.models.BigAutoField'
