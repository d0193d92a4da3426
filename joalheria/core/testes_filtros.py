# joalheria/core/testes_filtros.py

import unittest
from decimal import Decimal

from joalheria.core.entities import Produto
from joalheria.core.filtros import FiltroProdutos, ORDEM_PRECO_ASC, ORDEM_RECENTES


def _catalogo():
    return [
        Produto(id=1, nome='Anel Ouro Diamante', preco=Decimal('300'), tipo='Ring', metal='Gold', pedra='Diamond'),
        Produto(id=2, nome='Anel Prata', preco=Decimal('80'), tipo='Ring', metal='Silver'),
        Produto(id=3, nome='Colar Ouro', preco=Decimal('150'), tipo='Necklace', metal='Gold'),
        Produto(id=4, nome='Relógio', preco=Decimal('900'), tipo='Watch', metal='Steel'),
    ]


class TestFiltroProdutos(unittest.TestCase):

    def test_parametros_vazios_sao_ignorados(self):
        filtro = FiltroProdutos.de_parametros({'type': '', 'metal': '  ', 'stone': None})
        self.assertEqual(filtro.condicoes(), {})
        self.assertEqual(filtro.ordenacao, ORDEM_RECENTES)

    def test_condicoes_combinadas_com_and(self):
        """
        Cenário: type=Ring & metal=Gold retorna apenas o anel de ouro.
        """
        filtro = FiltroProdutos.de_parametros({'type': 'Ring', 'metal': 'Gold'})

        self.assertEqual(filtro.condicoes(), {'tipo': 'Ring', 'metal': 'Gold'})
        self.assertEqual([p.id for p in filtro.aplicar(_catalogo())], [1])

    def test_ordenacao_por_preco(self):
        crescente = FiltroProdutos(ordenacao=ORDEM_PRECO_ASC).aplicar(_catalogo())
        decrescente = FiltroProdutos.de_parametros({'sort': 'price_desc'}).aplicar(_catalogo())

        self.assertEqual([p.id for p in crescente], [2, 3, 1, 4])
        self.assertEqual([p.id for p in decrescente], [4, 1, 3, 2])

    def test_ordenacao_desconhecida_usa_mais_recentes(self):
        filtro = FiltroProdutos.de_parametros({'sort': 'popularidade'})

        self.assertEqual(filtro.ordenacao, ORDEM_RECENTES)
        self.assertEqual(filtro.ordenacao_orm(), '-id')
        self.assertEqual([p.id for p in filtro.aplicar(_catalogo())], [4, 3, 2, 1])

    def test_ordenacao_orm(self):
        self.assertEqual(FiltroProdutos(ordenacao='price_asc').ordenacao_orm(), 'preco')
        self.assertEqual(FiltroProdutos(ordenacao='price_desc').ordenacao_orm(), '-preco')


if __name__ == '__main__':
    unittest.main()
