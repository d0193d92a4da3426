# joalheria/core/testes_carrinho.py

import unittest
from decimal import Decimal

from joalheria.core.carrinho import CarrinhoStore, ArmazenamentoEmMemoria
from joalheria.core.entities import Produto
from joalheria.core.exceptions import DadosInvalidosError, ItemNaoEncontradoError


class TestCarrinhoStore(unittest.TestCase):

    def setUp(self):
        self.armazenamento = ArmazenamentoEmMemoria()
        self.carrinho = CarrinhoStore(self.armazenamento)
        self.anel = Produto(id=1, nome='Anel Solitário', preco=Decimal('100.00'), imagens=['/anel.jpg'])
        self.colar = Produto(id=2, nome='Colar de Pérolas', preco=Decimal('50.00'))

    def test_adicionar_soma_quantidade_do_mesmo_produto(self):
        """
        Cenário: Adicionar o mesmo produto duas vezes resulta em um único item.
        """
        # ACT
        self.carrinho.adicionar_item(self.anel, 1)
        self.carrinho.adicionar_item(self.anel, 2)

        # ASSERT
        self.assertEqual(len(self.carrinho.itens), 1)
        self.assertEqual(self.carrinho.itens[0].quantidade, 3)
        self.assertTrue(self.carrinho.itens[0].selecionado)
        self.assertEqual(self.carrinho.itens[0].imagem, '/anel.jpg')

    def test_total_e_total_selecionado(self):
        """
        Cenário: Anel x2 (200) + Colar x1 (50) = 250; desmarcando o colar, o selecionado é 200.
        """
        # ARRANGE
        self.carrinho.adicionar_item(self.anel, 2)
        self.carrinho.adicionar_item(self.colar, 1)

        # ACT
        self.carrinho.alternar_selecao(2)

        # ASSERT
        self.assertEqual(self.carrinho.total(), Decimal('250.00'))
        self.assertEqual(self.carrinho.total_selecionado(), Decimal('200.00'))
        self.assertEqual(len(self.carrinho), 2)
        self.assertEqual(self.carrinho.total_unidades(), 3)

    def test_total_selecionado_nunca_excede_total(self):
        self.carrinho.adicionar_item(self.anel, 1)
        self.carrinho.adicionar_item(self.colar, 4)
        for produto_id in (1, 2, 1):
            self.carrinho.alternar_selecao(produto_id)
            self.assertLessEqual(self.carrinho.total_selecionado(), self.carrinho.total())

    def test_total_acompanha_adicoes_atualizacoes_e_remocoes(self):
        """
        Cenário: Após qualquer sequência de operações, total() é a soma de preço x quantidade.
        """
        relogio = Produto(id=3, nome='Relógio', preco=Decimal('899.90'))
        operacoes = [
            lambda: self.carrinho.adicionar_item(self.anel, 2),
            lambda: self.carrinho.adicionar_item(relogio, 1),
            lambda: self.carrinho.adicionar_item(self.colar, 3),
            lambda: self.carrinho.atualizar_quantidade(1, 5),
            lambda: self.carrinho.remover_item(2),
            lambda: self.carrinho.adicionar_item(self.anel, 1),
            lambda: self.carrinho.atualizar_quantidade(3, 0),
            lambda: self.carrinho.alternar_selecao(3),
        ]

        for operacao in operacoes:
            operacao()
            esperado = sum((i.preco * i.quantidade for i in self.carrinho.itens), Decimal('0.00'))
            self.assertEqual(self.carrinho.total(), esperado)

        self.assertEqual(self.carrinho.total(), Decimal('1499.90'))
        self.assertEqual(self.carrinho.total_selecionado(), Decimal('600.00'))

    def test_selecionar_todos_e_idempotente(self):
        self.carrinho.adicionar_item(self.anel)
        self.carrinho.adicionar_item(self.colar)
        self.carrinho.alternar_selecao(1)

        self.carrinho.selecionar_todos()
        primeiro = [item.selecionado for item in self.carrinho.itens]
        self.carrinho.selecionar_todos()

        self.assertEqual(primeiro, [True, True])
        self.assertEqual([item.selecionado for item in self.carrinho.itens], primeiro)

    def test_quantidade_minima_e_um(self):
        """
        Cenário: Atualizar a quantidade para 0 ou negativo mantém 1 unidade.
        """
        self.carrinho.adicionar_item(self.anel, 3)

        self.carrinho.atualizar_quantidade(1, 0)
        self.assertEqual(self.carrinho.itens[0].quantidade, 1)

        self.carrinho.atualizar_quantidade(1, -5)
        self.assertEqual(self.carrinho.itens[0].quantidade, 1)

    def test_adicionar_quantidade_invalida_falha(self):
        with self.assertRaises(DadosInvalidosError):
            self.carrinho.adicionar_item(self.anel, 0)
        self.assertEqual(self.carrinho.itens, [])

    def test_item_inexistente(self):
        for operacao in (self.carrinho.remover_item, self.carrinho.alternar_selecao):
            with self.assertRaises(ItemNaoEncontradoError):
                operacao(99)
        with self.assertRaises(ItemNaoEncontradoError):
            self.carrinho.atualizar_quantidade(99, 2)

    def test_remover_selecionados_mantem_os_demais(self):
        self.carrinho.adicionar_item(self.anel)
        self.carrinho.adicionar_item(self.colar)
        self.carrinho.alternar_selecao(2)

        removidos = self.carrinho.remover_selecionados()

        self.assertEqual(removidos, 1)
        self.assertEqual([item.produto_id for item in self.carrinho.itens], [2])

    def test_estado_persistido_e_recarregado(self):
        """
        Cenário: Um novo CarrinhoStore sobre o mesmo armazenamento vê os mesmos itens.
        """
        self.carrinho.adicionar_item(self.anel, 2)
        self.carrinho.alternar_selecao(1)

        recarregado = CarrinhoStore(self.armazenamento)

        self.assertEqual(len(recarregado.itens), 1)
        self.assertEqual(recarregado.itens[0].preco, Decimal('100.00'))
        self.assertFalse(recarregado.itens[0].selecionado)

    def test_carregar_corrige_quantidade_invalida(self):
        armazenamento = ArmazenamentoEmMemoria([
            {'produto_id': 1, 'nome': 'Anel', 'preco': '10.00', 'quantidade': 0, 'selecionado': True},
        ])
        self.assertEqual(CarrinhoStore(armazenamento).itens[0].quantidade, 1)

    def test_limpar(self):
        self.carrinho.adicionar_item(self.anel)
        self.carrinho.limpar()
        self.assertEqual(self.carrinho.total(), Decimal('0'))
        self.assertEqual(self.armazenamento.carregar(), [])


if __name__ == '__main__':
    unittest.main()
