import signal

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from joalheria.core.espera import EsperaLimitada
from joalheria.core.exceptions import EsperaCanceladaError, PedidoNaoEncontradoError, TempoEsgotadoError
from joalheria.core.rastreamento import info_rastreio
from joalheria.core.use_cases import AcompanharRastreioUseCase, ConsultarRastreioUseCase
from joalheria.infrastructure import instances


class Command(BaseCommand):
    help = 'Acompanha o status de rastreio de um pedido até a entrega ou o fim do prazo'

    def add_arguments(self, parser):
        parser.add_argument('pedido', help='ID do pedido ou código de rastreio')
        parser.add_argument('--intervalo', type=float, default=settings.RASTREIO_INTERVALO_SEGUNDOS)
        parser.add_argument('--timeout', type=float, default=settings.RASTREIO_TIMEOUT_SEGUNDOS)

    def handle(self, *args, **options):
        espera = EsperaLimitada(timeout=options['timeout'], intervalo=options['intervalo'])
        use_case = AcompanharRastreioUseCase(
            consultar=ConsultarRastreioUseCase(instances.pedido_repo),
            espera=espera,
            relogio=instances.agora,
        )

        def exibir(status):
            info = info_rastreio(status)
            self.stdout.write(f"{info['label']}: {info['descricao']}")

        def cancelar_ao_interromper(signum, frame):
            # Ctrl+C encerra a espera na próxima verificação
            espera.cancelar()

        anterior = signal.signal(signal.SIGINT, cancelar_ao_interromper)
        try:
            use_case.executar(options['pedido'], ao_mudar=exibir)
        except PedidoNaoEncontradoError as e:
            raise CommandError(e.message)
        except TempoEsgotadoError:
            self.stdout.write(self.style.WARNING('Prazo de acompanhamento esgotado antes da entrega.'))
            return
        except EsperaCanceladaError:
            self.stdout.write(self.style.WARNING('Acompanhamento cancelado.'))
            return
        finally:
            signal.signal(signal.SIGINT, anterior)

        self.stdout.write(self.style.SUCCESS('Pedido entregue!'))
