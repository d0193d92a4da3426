# joalheria/core/carrinho.py
"""
Carrinho de compras como contêiner de estado explícito.

O CarrinhoStore recebe a porta de armazenamento no construtor (sessão Django,
memória em testes) e persiste o estado após cada mutação.
"""
from decimal import Decimal
from typing import Dict, List, Optional, Any

from joalheria.core.entities import ItemCarrinho, Produto
from joalheria.core.exceptions import DadosInvalidosError, ItemNaoEncontradoError
from joalheria.core.ports import IArmazenamentoCarrinho


def _item_para_dict(item: ItemCarrinho) -> Dict[str, Any]:
    return {
        'produto_id': item.produto_id,
        'nome': item.nome,
        'preco': str(item.preco),
        'quantidade': item.quantidade,
        'selecionado': item.selecionado,
        'imagem': item.imagem,
    }


def _item_de_dict(dados: Dict[str, Any]) -> ItemCarrinho:
    return ItemCarrinho(
        produto_id=int(dados['produto_id']),
        nome=dados.get('nome', ''),
        preco=Decimal(str(dados.get('preco', '0'))),
        quantidade=max(1, int(dados.get('quantidade', 1))),
        selecionado=bool(dados.get('selecionado', True)),
        imagem=dados.get('imagem'),
    )


class ArmazenamentoEmMemoria:
    """Armazenamento volátil, usado em testes e em contextos sem sessão."""

    def __init__(self, itens: Optional[List[Dict[str, Any]]] = None):
        self.itens = list(itens or [])

    def carregar(self) -> List[Dict[str, Any]]:
        return list(self.itens)

    def salvar(self, itens: List[Dict[str, Any]]) -> None:
        self.itens = list(itens)


class CarrinhoStore:

    def __init__(self, armazenamento: IArmazenamentoCarrinho):
        self.armazenamento = armazenamento
        self._itens: List[ItemCarrinho] = [_item_de_dict(d) for d in armazenamento.carregar()]

    # ------------------------------------------------------------------
    # Consultas
    # ------------------------------------------------------------------

    @property
    def itens(self) -> List[ItemCarrinho]:
        return list(self._itens)

    def __len__(self):
        return len(self._itens)

    def total_unidades(self) -> int:
        return sum(item.quantidade for item in self._itens)

    def _buscar(self, produto_id: int) -> Optional[ItemCarrinho]:
        return next((item for item in self._itens if item.produto_id == produto_id), None)

    def total(self) -> Decimal:
        return sum((item.subtotal for item in self._itens), Decimal('0.00'))

    def total_selecionado(self) -> Decimal:
        return sum((item.subtotal for item in self._itens if item.selecionado), Decimal('0.00'))

    def itens_selecionados(self) -> List[ItemCarrinho]:
        """Snapshot (cópias) dos itens selecionados para o checkout."""
        return [
            ItemCarrinho(
                produto_id=item.produto_id, nome=item.nome, preco=item.preco,
                quantidade=item.quantidade, selecionado=True, imagem=item.imagem,
            )
            for item in self._itens if item.selecionado
        ]

    # ------------------------------------------------------------------
    # Mutações (todas persistem ao final)
    # ------------------------------------------------------------------

    def _persistir(self):
        self.armazenamento.salvar([_item_para_dict(item) for item in self._itens])

    def adicionar_item(self, produto: Produto, quantidade: int = 1) -> ItemCarrinho:
        """Soma a quantidade se o produto já está no carrinho, senão adiciona selecionado."""
        if quantidade < 1:
            raise DadosInvalidosError("A quantidade a adicionar deve ser positiva.", campos=['quantidade'])
        if produto.id is None:
            raise DadosInvalidosError("Produto sem identificador.", campos=['produto_id'])

        item = self._buscar(produto.id)
        if item:
            item.quantidade += quantidade
        else:
            item = ItemCarrinho(
                produto_id=produto.id,
                nome=produto.nome or '',
                preco=Decimal(produto.preco),
                quantidade=quantidade,
                selecionado=True,
                imagem=produto.imagens[0] if produto.imagens else None,
            )
            self._itens.append(item)

        self._persistir()
        return item

    def remover_item(self, produto_id: int):
        item = self._buscar(produto_id)
        if not item:
            raise ItemNaoEncontradoError("Item não encontrado no carrinho.")
        self._itens.remove(item)
        self._persistir()

    def atualizar_quantidade(self, produto_id: int, quantidade: int) -> ItemCarrinho:
        item = self._buscar(produto_id)
        if not item:
            raise ItemNaoEncontradoError("Item não encontrado no carrinho.")
        item.quantidade = max(1, int(quantidade))
        self._persistir()
        return item

    def alternar_selecao(self, produto_id: int) -> ItemCarrinho:
        item = self._buscar(produto_id)
        if not item:
            raise ItemNaoEncontradoError("Item não encontrado no carrinho.")
        item.selecionado = not item.selecionado
        self._persistir()
        return item

    def selecionar_todos(self):
        for item in self._itens:
            item.selecionado = True
        self._persistir()

    def limpar(self):
        self._itens = []
        self._persistir()

    def remover_selecionados(self) -> int:
        """Remove os itens selecionados (após um checkout aceito)."""
        antes = len(self._itens)
        self._itens = [item for item in self._itens if not item.selecionado]
        self._persistir()
        return antes - len(self._itens)

    def para_dict(self) -> Dict[str, Any]:
        return {
            'itens': [_item_para_dict(item) for item in self._itens],
            'total': str(self.total()),
            'total_selecionado': str(self.total_selecionado()),
            'quantidade_total': self.total_unidades(),
        }
