# joalheria/core/testes_espera.py

import unittest

from joalheria.core.espera import EsperaLimitada
from joalheria.core.exceptions import TempoEsgotadoError, EsperaCanceladaError


class RelogioFalso:
    """Relógio manual: `dormir` apenas avança o tempo."""

    def __init__(self):
        self.agora = 0.0
        self.sonos = []

    def __call__(self):
        return self.agora

    def dormir(self, segundos):
        self.sonos.append(segundos)
        self.agora += segundos


class TestEsperaLimitada(unittest.TestCase):

    def setUp(self):
        self.relogio = RelogioFalso()

    def _espera(self, timeout=1.0, intervalo=0.25):
        return EsperaLimitada(timeout, intervalo, relogio=self.relogio, dormir=self.relogio.dormir)

    def test_retorna_o_primeiro_valor_verdadeiro(self):
        """
        Cenário: A condição fica verdadeira na terceira avaliação.
        """
        respostas = iter([None, False, 'pronto'])

        resultado = self._espera().aguardar(lambda: next(respostas))

        self.assertEqual(resultado, 'pronto')
        self.assertEqual(self.relogio.sonos, [0.25, 0.25])

    def test_tempo_esgotado(self):
        """
        Cenário: A condição nunca é satisfeita; a espera respeita o prazo e falha.
        """
        with self.assertRaises(TempoEsgotadoError):
            self._espera(timeout=1.0, intervalo=0.375).aguardar(lambda: None)

        self.assertAlmostEqual(sum(self.relogio.sonos), 1.0)
        self.assertEqual(self.relogio.sonos, [0.375, 0.375, 0.25])

    def test_timeout_zero_avalia_uma_vez(self):
        chamadas = []
        with self.assertRaises(TempoEsgotadoError):
            self._espera(timeout=0).aguardar(lambda: chamadas.append(1))
        self.assertEqual(len(chamadas), 1)
        self.assertEqual(self.relogio.sonos, [])

    def test_cancelamento(self):
        espera = self._espera(timeout=10)

        def condicao():
            espera.cancelar()
            return None

        with self.assertRaises(EsperaCanceladaError):
            espera.aguardar(condicao)
        self.assertTrue(espera.cancelada)

    def test_parametros_invalidos(self):
        with self.assertRaises(ValueError):
            EsperaLimitada(timeout=-1)
        with self.assertRaises(ValueError):
            EsperaLimitada(timeout=1, intervalo=0)


if __name__ == '__main__':
    unittest.main()
