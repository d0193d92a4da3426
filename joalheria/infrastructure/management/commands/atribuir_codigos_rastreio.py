from django.core.management.base import BaseCommand

from joalheria.core.use_cases import AtribuirCodigosRastreioUseCase
from joalheria.infrastructure import instances


class Command(BaseCommand):
    help = 'Gera códigos de rastreio para pedidos aprovados há pelo menos 2 dias'

    def handle(self, *args, **kwargs):
        use_case = AtribuirCodigosRastreioUseCase(instances.pedido_repo)
        atualizados = use_case.executar(agora=instances.agora())

        for pedido in atualizados:
            self.stdout.write(f'Pedido #{pedido.id}: {pedido.codigo_rastreio}')
        self.stdout.write(self.style.SUCCESS(f'{len(atualizados)} pedido(s) atualizado(s).'))
