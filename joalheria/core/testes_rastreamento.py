# joalheria/core/testes_rastreamento.py

import random
import re
import unittest
from datetime import datetime, timedelta, timezone

from joalheria.core import rastreamento
from joalheria.core.entities import Pedido, DadosCliente, Endereco, StatusRastreio


ENVIO = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _dias(n, horas=0):
    return ENVIO + timedelta(days=n, hours=horas)


class TestDerivarStatusRastreio(unittest.TestCase):

    def test_limites_das_faixas(self):
        """
        Cenário: Cada faixa começa no seu dia (inclusive) e termina no dia anterior ao próximo.
        """
        esperado = {
            0: StatusRastreio.EMBALADO,
            2: StatusRastreio.EMBALADO,
            3: StatusRastreio.EM_TRANSITO,
            5: StatusRastreio.EM_TRANSITO,
            6: StatusRastreio.FISCALIZACAO,
            9: StatusRastreio.FISCALIZACAO,
            10: StatusRastreio.ENTREGUE,
            45: StatusRastreio.ENTREGUE,
        }
        for dias, status in esperado.items():
            with self.subTest(dias=dias):
                self.assertEqual(rastreamento.derivar_status_rastreio(ENVIO, _dias(dias)), status)

    def test_dias_sao_truncados(self):
        """
        Cenário: 2 dias e 23 horas ainda contam como 2 dias completos.
        """
        self.assertEqual(
            rastreamento.derivar_status_rastreio(ENVIO, _dias(2, horas=23)),
            StatusRastreio.EMBALADO,
        )
        self.assertEqual(
            rastreamento.derivar_status_rastreio(ENVIO, _dias(3)),
            StatusRastreio.EM_TRANSITO,
        )

    def test_tempo_negativo_fica_embalado(self):
        """
        Cenário: Data de envio no futuro (relógio adiantado) não avança o status.
        """
        self.assertEqual(rastreamento.derivar_status_rastreio(ENVIO, _dias(-4)), StatusRastreio.EMBALADO)
        self.assertEqual(rastreamento.derivar_status_rastreio(ENVIO, _dias(-11)), StatusRastreio.EMBALADO)

    def test_status_nunca_regride_com_o_tempo(self):
        ordem = [
            StatusRastreio.EMBALADO, StatusRastreio.EM_TRANSITO,
            StatusRastreio.FISCALIZACAO, StatusRastreio.ENTREGUE,
        ]
        anterior = 0
        for horas in range(0, 15 * 24, 7):
            atual = ordem.index(rastreamento.derivar_status_rastreio(ENVIO, ENVIO + timedelta(hours=horas)))
            self.assertGreaterEqual(atual, anterior)
            anterior = atual

    def test_pedido_sem_envio_fica_pendente(self):
        pedido = Pedido(
            cliente=DadosCliente(), endereco_entrega=Endereco(), itens=[],
            total=0, metodo_pagamento='pix',
        )
        self.assertEqual(rastreamento.status_rastreio_do_pedido(pedido, _dias(30)), StatusRastreio.PENDENTE)


class TestCodigoEInformacoes(unittest.TestCase):

    def test_formato_do_codigo(self):
        """
        Cenário: 7 dígitos, uma letra maiúscula e o sufixo ' BR'.
        """
        for semente in range(20):
            codigo = rastreamento.gerar_codigo_rastreio(random.Random(semente))
            self.assertRegex(codigo, r'^\d{7}[A-Z] BR$')

    def test_codigo_aleatorio_por_padrao(self):
        self.assertTrue(re.match(r'^\d{7}[A-Z] BR$', rastreamento.gerar_codigo_rastreio()))

    def test_data_estimada_de_envio(self):
        self.assertEqual(rastreamento.data_estimada_envio(ENVIO), _dias(2))

    def test_info_de_status_desconhecido_cai_em_pendente(self):
        info = rastreamento.info_rastreio('extraviado')
        self.assertEqual(info['status'], 'pending')
        self.assertEqual(info['label'], 'Pendente')

    def test_info_em_transito(self):
        info = rastreamento.info_rastreio(StatusRastreio.EM_TRANSITO)
        self.assertEqual(info['label'], 'Em Trânsito')
        self.assertEqual(info['cor'], 'yellow')

    def test_linha_do_tempo_ate_o_status_atual(self):
        """
        Cenário: No 7º dia, a linha do tempo mostra embalado, em trânsito e fiscalização.
        """
        etapas = rastreamento.linha_do_tempo(ENVIO, _dias(7))

        self.assertEqual([e['status'] for e in etapas], ['embalado', 'em_transito', 'fiscalizacao'])
        self.assertEqual(etapas[1]['data'], _dias(3))
        self.assertEqual(etapas[2]['data'], _dias(6))

    def test_linha_do_tempo_vazia_sem_envio(self):
        self.assertEqual(rastreamento.linha_do_tempo(None, _dias(7)), [])


if __name__ == '__main__':
    unittest.main()
