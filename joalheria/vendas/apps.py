from django.apps import AppConfig

class VendasConfig(AppConfig):
    # O nome da app deve ser o caminho Python completo para o módulo.
    name = 'joalheria.vendas'
    label = 'vendas'

    # Nome amigável exibido no admin
    verbose_name = 'Vendas, Promoções e Cupons'

    default_auto_field = 'django.db.models.BigAutoField'
