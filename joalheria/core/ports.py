# joalheria/core/ports.py
"""
Definição das Portas (Interfaces/Protocolos) da Arquitetura Limpa.

Estes protocolos definem o contrato que a camada de Infraestrutura (Repositorios, Gateways)
DEVE seguir para se conectar à camada Core (Casos de Uso).
"""

from typing import Protocol, List, Optional, Dict, Any
from abc import abstractmethod
from datetime import datetime

from joalheria.core.entities import (
    Produto, Pedido, Usuario, TransacaoPagamento, Endereco, StatusPedido,
    ConfiguracaoSite, Promocao, Cupom, Banner,
)
from joalheria.core.filtros import FiltroProdutos


# ====================================================================
# 1. REPOSITÓRIOS (Portas de Persistência)
# ====================================================================

class IProdutoRepository(Protocol):
    """Protocolo para a persistência e busca de Produtos."""

    @abstractmethod
    def buscar_por_id(self, produto_id: int) -> Optional[Produto]: ...

    @abstractmethod
    def buscar_por_filtro(self, filtro: FiltroProdutos) -> List[Produto]: ...

    @abstractmethod
    def salvar(self, produto: Produto) -> Produto: ...

    @abstractmethod
    def deletar(self, produto_id: int) -> bool: ...


class IPedidoRepository(Protocol):
    """Protocolo para a persistência e gestão de Pedidos."""

    @abstractmethod
    def criar(self, pedido: Pedido) -> Pedido: ...

    @abstractmethod
    def buscar_por_id(self, pedido_id: int) -> Optional[Pedido]: ...

    @abstractmethod
    def buscar_por_codigo_rastreio(self, codigo: str) -> Optional[Pedido]: ...

    @abstractmethod
    def buscar_por_pagamento_id(self, pagamento_id: str) -> Optional[Pedido]: ...

    @abstractmethod
    def listar_todos(self) -> List[Pedido]: ...

    @abstractmethod
    def listar_por_email(self, email: str) -> List[Pedido]: ...

    @abstractmethod
    def listar_aprovados_sem_rastreio(self) -> List[Pedido]: ...

    @abstractmethod
    def atualizar_status(self, pedido_id: int, status: StatusPedido,
                         pagamento_id: Optional[str] = None) -> Optional[Pedido]: ...

    @abstractmethod
    def registrar_envio(self, pedido_id: int, codigo_rastreio: str, enviado_em: datetime) -> Pedido: ...


class IConfiguracaoRepository(Protocol):

    @abstractmethod
    def listar(self) -> List[ConfiguracaoSite]: ...

    @abstractmethod
    def salvar(self, chave: str, valor: str) -> ConfiguracaoSite: ...


class IPromocaoRepository(Protocol):

    @abstractmethod
    def listar(self) -> List[Promocao]: ...

    @abstractmethod
    def criar(self, promocao: Promocao) -> Promocao: ...

    @abstractmethod
    def deletar(self, promocao_id: int) -> bool: ...


class ICupomRepository(Protocol):

    @abstractmethod
    def listar(self) -> List[Cupom]: ...

    @abstractmethod
    def buscar_por_codigo(self, codigo: str) -> Optional[Cupom]: ...

    @abstractmethod
    def criar(self, cupom: Cupom) -> Cupom: ...

    @abstractmethod
    def deletar(self, cupom_id: int) -> bool: ...

    @abstractmethod
    def registrar_uso(self, codigo: str) -> Cupom: ...

    @abstractmethod
    def liberar_uso(self, codigo: str) -> None: ...


class IBannerRepository(Protocol):

    @abstractmethod
    def listar(self, somente_ativos: bool = False) -> List[Banner]: ...

    @abstractmethod
    def criar(self, banner: Banner) -> Banner: ...

    @abstractmethod
    def deletar(self, banner_id: int) -> bool: ...


class IUsuarioRepository(Protocol):
    """Protocolo para a persistência de Usuários, Endereços e Favoritos."""

    @abstractmethod
    def buscar_por_google_id(self, google_id: str) -> Optional[Usuario]: ...

    @abstractmethod
    def buscar_por_email(self, email: str) -> Optional[Usuario]: ...

    @abstractmethod
    def criar(self, usuario: Usuario) -> Usuario: ...

    @abstractmethod
    def vincular_google(self, usuario_id: int, google_id: str, avatar_url: Optional[str]) -> Usuario: ...

    @abstractmethod
    def listar_enderecos(self, usuario_id: int) -> List[Endereco]: ...

    @abstractmethod
    def salvar_endereco(self, usuario_id: int, endereco: Endereco) -> Endereco: ...

    @abstractmethod
    def listar_favoritos(self, usuario_id: int) -> List[int]: ...

    @abstractmethod
    def adicionar_favorito(self, usuario_id: int, produto_id: int) -> None: ...

    @abstractmethod
    def remover_favorito(self, usuario_id: int, produto_id: int) -> None: ...


class IArmazenamentoCarrinho(Protocol):
    """Persistência durável do carrinho (sessão, arquivo, memória)."""

    @abstractmethod
    def carregar(self) -> List[Dict[str, Any]]: ...

    @abstractmethod
    def salvar(self, itens: List[Dict[str, Any]]) -> None: ...


# ====================================================================
# 2. GATEWAYS (Portas de Serviços Externos)
# ====================================================================

class IGatewayPagamento(Protocol):
    """Protocolo para serviços externos de processamento de pagamento."""

    @abstractmethod
    def processar_pagamento(self, pedido: Pedido, dados: dict) -> TransacaoPagamento: ...

    @abstractmethod
    def verificar_status(self, transacao_id: str) -> TransacaoPagamento: ...


class IConsultaCep(Protocol):
    """Protocolo para o serviço externo de autocompletar endereço."""

    @abstractmethod
    def consultar(self, cep: str) -> Optional[Endereco]: ...


class IProvedorIdentidade(Protocol):
    """Protocolo para login delegado (OAuth)."""

    @abstractmethod
    def url_autorizacao(self, state: str) -> str: ...

    @abstractmethod
    def obter_perfil(self, codigo: str) -> Dict[str, Any]: ...


class IArmazenamentoArquivos(Protocol):
    """Protocolo para gravação de arquivos enviados (imagens do catálogo)."""

    @abstractmethod
    def salvar(self, nome: str, conteudo) -> str: ...
