# joalheria/core/testes_checkout.py

import unittest
from decimal import Decimal
from unittest.mock import Mock

from joalheria.core.carrinho import CarrinhoStore, ArmazenamentoEmMemoria
from joalheria.core.checkout import (
    SequenciadorCheckout, EtapaCheckout, formatar_cpf, formatar_telefone,
)
from joalheria.core.entities import Produto, Pedido, TransacaoPagamento, StatusPedido
from joalheria.core.exceptions import (
    CarrinhoVazioError, DadosInvalidosError, EtapaInvalidaError, GatewayIndisponivelError,
)

CLIENTE = {'nome': 'Maria Souza', 'email': 'maria@example.com', 'telefone': '11987654321', 'cpf': '12345678901'}
ENDERECO = {'cep': '01001-000', 'rua': 'Praça da Sé', 'numero': '100', 'cidade': 'São Paulo', 'estado': 'SP'}


class TestFormatacao(unittest.TestCase):

    def test_cpf_progressivo(self):
        self.assertEqual(formatar_cpf('123'), '123')
        self.assertEqual(formatar_cpf('1234'), '123.4')
        self.assertEqual(formatar_cpf('1234567'), '123.456.7')
        self.assertEqual(formatar_cpf('123.456.789-0199'), '123.456.789-01')

    def test_telefone_progressivo(self):
        self.assertEqual(formatar_telefone('11'), '11')
        self.assertEqual(formatar_telefone('119876'), '(11) 9876')
        self.assertEqual(formatar_telefone('11987654321'), '(11) 98765-4321')


class TestSequenciadorCheckout(unittest.TestCase):

    def setUp(self):
        """
        Carrinho com um anel (selecionado) e um colar (desmarcado);
        o caso de uso de pagamento é simulado com Mock.
        """
        self.carrinho = CarrinhoStore(ArmazenamentoEmMemoria())
        self.carrinho.adicionar_item(Produto(id=1, nome='Anel', preco=Decimal('100.00')), 2)
        self.carrinho.adicionar_item(Produto(id=2, nome='Colar', preco=Decimal('50.00')), 1)
        self.carrinho.alternar_selecao(2)

        self.criar_pagamento = Mock()
        self.checkout = SequenciadorCheckout(self.carrinho, self.criar_pagamento)

    def _ate_revisao(self):
        self.checkout.atualizar_cliente(CLIENTE)
        self.checkout.avancar()
        self.checkout.atualizar_endereco(ENDERECO)
        self.checkout.avancar()
        self.checkout.escolher_metodo('pix')
        self.checkout.avancar()
        self.assertEqual(self.checkout.etapa, EtapaCheckout.REVISAO)

    def _pedido(self):
        return Pedido(
            cliente=self.checkout.cliente, endereco_entrega=self.checkout.endereco,
            itens=[], total=Decimal('200.00'), metodo_pagamento='pix', id=42,
        )

    def test_guarda_da_etapa_1_nao_altera_a_etapa(self):
        """
        Cenário: Avançar com dados do cliente incompletos falha e a etapa continua 1.
        """
        # ARRANGE
        self.checkout.atualizar_cliente({'nome': 'Maria', 'email': 'maria@example.com'})

        # ACT e ASSERT
        with self.assertRaises(DadosInvalidosError) as ctx:
            self.checkout.avancar()
        self.assertEqual(self.checkout.etapa, EtapaCheckout.DADOS_CLIENTE)
        self.assertEqual(sorted(ctx.exception.campos), ['cpf', 'telefone'])

    def test_guarda_do_endereco(self):
        self.checkout.atualizar_cliente(CLIENTE)
        self.checkout.avancar()
        self.checkout.atualizar_endereco({'rua': 'Rua A'})

        with self.assertRaises(DadosInvalidosError):
            self.checkout.avancar()
        self.assertEqual(self.checkout.etapa, EtapaCheckout.ENDERECO)

    def test_dados_do_cliente_sao_formatados(self):
        self.checkout.atualizar_cliente(CLIENTE)
        self.assertEqual(self.checkout.cliente.cpf, '123.456.789-01')
        self.assertEqual(self.checkout.cliente.telefone, '(11) 98765-4321')

    def test_voltar(self):
        """
        Cenário: Voltar na etapa 1 não faz nada; nas demais, volta exatamente uma etapa.
        """
        self.assertEqual(self.checkout.voltar(), EtapaCheckout.DADOS_CLIENTE)
        self.checkout.atualizar_cliente(CLIENTE)
        self.checkout.avancar()
        self.assertEqual(self.checkout.voltar(), EtapaCheckout.DADOS_CLIENTE)

    def test_metodo_invalido(self):
        with self.assertRaises(DadosInvalidosError):
            self.checkout.escolher_metodo('cheque')
        self.assertEqual(self.checkout.metodo_pagamento, 'credit_card')

    def test_pagamento_aprovado_conclui_e_remove_selecionados(self):
        """
        Cenário: Pagamento aceito leva à confirmação e remove apenas os itens selecionados.
        """
        # ARRANGE
        self._ate_revisao()
        self.checkout.aplicar_cupom(' promo10 ')
        self.criar_pagamento.executar.return_value = (
            self._pedido(),
            TransacaoPagamento(status=StatusPedido.PENDENTE, referencia_externa='PAY-1', qr_code='000201'),
        )

        # ACT
        etapa = self.checkout.avancar({'token': None})

        # ASSERT
        self.assertEqual(etapa, EtapaCheckout.CONFIRMACAO)
        self.assertEqual(self.checkout.resultado['pedido_id'], 42)
        self.assertEqual(self.checkout.resultado['qr_code'], '000201')
        self.assertEqual([item.produto_id for item in self.carrinho.itens], [2])

        kwargs = self.criar_pagamento.executar.call_args.kwargs
        self.assertEqual(kwargs['metodo_pagamento'], 'pix')
        self.assertEqual(kwargs['codigo_cupom'], 'PROMO10')
        self.assertEqual([item.produto_id for item in kwargs['itens']], [1])

    def test_falha_do_gateway_permanece_na_revisao(self):
        """
        Cenário: Gateway indisponível deixa o checkout na revisão com a mensagem de erro.
        """
        self._ate_revisao()
        self.criar_pagamento.executar.side_effect = GatewayIndisponivelError("Gateway fora do ar.")

        etapa = self.checkout.pagar()

        self.assertEqual(etapa, EtapaCheckout.REVISAO)
        self.assertEqual(self.checkout.erro, "Gateway fora do ar.")
        self.assertEqual(len(self.carrinho.itens), 2)

    def test_pagamento_recusado_permanece_na_revisao(self):
        self._ate_revisao()
        self.criar_pagamento.executar.return_value = (
            self._pedido(),
            TransacaoPagamento(status=StatusPedido.REJEITADO, detalhe='cc_rejected_insufficient_amount'),
        )

        self.assertEqual(self.checkout.pagar(), EtapaCheckout.REVISAO)
        self.assertEqual(self.checkout.erro, 'cc_rejected_insufficient_amount')
        self.assertEqual(len(self.carrinho.itens), 2)

    def test_pagar_sem_itens_selecionados(self):
        self._ate_revisao()
        self.carrinho.alternar_selecao(1)

        with self.assertRaises(CarrinhoVazioError):
            self.checkout.pagar()
        self.criar_pagamento.executar.assert_not_called()

    def test_pagar_fora_da_revisao(self):
        with self.assertRaises(EtapaInvalidaError):
            self.checkout.pagar()

    def test_confirmacao_e_terminal(self):
        self._ate_revisao()
        self.criar_pagamento.executar.return_value = (
            self._pedido(), TransacaoPagamento(status=StatusPedido.APROVADO, referencia_externa='PAY-2'),
        )
        self.checkout.pagar()

        with self.assertRaises(EtapaInvalidaError):
            self.checkout.avancar()
        with self.assertRaises(EtapaInvalidaError):
            self.checkout.voltar()
        with self.assertRaises(EtapaInvalidaError):
            self.checkout.atualizar_cliente({'nome': 'Outra'})

    def test_estado_serializavel(self):
        """
        Cenário: O estado salvo em para_dict() recria o sequenciador na mesma etapa.
        """
        self.checkout.atualizar_cliente(CLIENTE)
        self.checkout.avancar()

        recriado = SequenciadorCheckout(self.carrinho, self.criar_pagamento, estado=self.checkout.para_dict())

        self.assertEqual(recriado.etapa, EtapaCheckout.ENDERECO)
        self.assertEqual(recriado.cliente.email, 'maria@example.com')

    def test_reiniciar(self):
        self.checkout.atualizar_cliente(CLIENTE)
        self.checkout.avancar()
        self.checkout.reiniciar()
        self.assertEqual(self.checkout.etapa, EtapaCheckout.DADOS_CLIENTE)
        self.assertEqual(self.checkout.cliente.nome, '')


if __name__ == '__main__':
    unittest.main()
