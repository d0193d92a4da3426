"""
Management command para aguardar o banco de dados estar disponível.
"""
from django.db import connections
from django.db.utils import OperationalError
from django.core.management.base import BaseCommand, CommandError

from joalheria.core.espera import EsperaLimitada
from joalheria.core.exceptions import TempoEsgotadoError


class Command(BaseCommand):
    """Django command para pausar a execução até o banco de dados estar disponível."""

    help = 'Aguarda (com prazo) até o banco de dados aceitar conexões.'

    def add_arguments(self, parser):
        parser.add_argument('--timeout', type=float, default=60, help='Prazo máximo em segundos.')
        parser.add_argument('--intervalo', type=float, default=1, help='Intervalo entre tentativas.')

    def _conectar(self):
        try:
            connections['default'].ensure_connection()
            return True
        except OperationalError:
            self.stdout.write('Banco de dados indisponível, aguardando...')
            return False

    def handle(self, *args, **options):
        self.stdout.write('Aguardando pelo banco de dados...')
        espera = EsperaLimitada(timeout=options['timeout'], intervalo=options['intervalo'])
        try:
            espera.aguardar(self._conectar)
        except TempoEsgotadoError as e:
            raise CommandError(e.message)

        self.stdout.write(self.style.SUCCESS('Banco de dados disponível!'))
