# joalheria/infrastructure/testes_comandos.py

import signal
from io import StringIO
from unittest.mock import patch

from django.core.management import call_command
from django.test import SimpleTestCase

from joalheria.core.entities import StatusRastreio

COMANDO = 'joalheria.infrastructure.management.commands.acompanhar_rastreio'


class RastreioInterrompido:
    """Recebe um Ctrl+C enquanto aguarda a próxima leitura do status."""

    def __init__(self, consultar, espera, relogio):
        self.espera = espera

    def executar(self, identificador, ao_mudar=None):
        signal.getsignal(signal.SIGINT)(signal.SIGINT, None)
        return self.espera.aguardar(lambda: None)


class RastreioEntregue:

    def __init__(self, consultar, espera, relogio):
        pass

    def executar(self, identificador, ao_mudar=None):
        ao_mudar(StatusRastreio.ENTREGUE)
        return StatusRastreio.ENTREGUE


class TestAcompanharRastreio(SimpleTestCase):

    @patch(f'{COMANDO}.AcompanharRastreioUseCase', RastreioInterrompido)
    def test_ctrl_c_cancela_a_espera(self):
        """
        Cenário: SIGINT durante o acompanhamento cancela a espera e restaura o handler anterior.
        """
        # ARRANGE
        anterior = signal.getsignal(signal.SIGINT)
        saida = StringIO()

        # ACT
        call_command('acompanhar_rastreio', '42', '--timeout', '60', '--intervalo', '5', stdout=saida)

        # ASSERT
        self.assertIn('Acompanhamento cancelado.', saida.getvalue())
        self.assertIs(signal.getsignal(signal.SIGINT), anterior)

    @patch(f'{COMANDO}.AcompanharRastreioUseCase', RastreioEntregue)
    def test_pedido_entregue(self):
        saida = StringIO()

        call_command('acompanhar_rastreio', 'BR123456789BR', stdout=saida)

        self.assertIn('Pedido entregue!', saida.getvalue())
