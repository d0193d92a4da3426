from dataclasses import dataclass, field
from decimal import Decimal
from datetime import datetime
from enum import Enum
from typing import List, Optional, Dict

# ====================================================================
# ENUMS DE STATUS
# ====================================================================

class StatusPedido(str, Enum):
    """Status de pagamento de um pedido."""
    PENDENTE = 'pending'
    APROVADO = 'approved'
    REJEITADO = 'rejected'
    ESTORNADO = 'refunded'


class StatusRastreio(str, Enum):
    """Status de rastreamento (derivado, nunca persistido)."""
    EMBALADO = 'embalado'
    EM_TRANSITO = 'em_transito'
    FISCALIZACAO = 'fiscalizacao'
    ENTREGUE = 'entregue'
    PENDENTE = 'pending'


class MetodoPagamento(str, Enum):
    CARTAO_CREDITO = 'credit_card'
    CARTAO_DEBITO = 'debit_card'
    PIX = 'pix'
    BOLETO = 'boleto'


# ====================================================================
# ENTIDADES CORE
# Representam os objetos de negócio puros.
# ====================================================================

@dataclass
class Usuario:
    """Entidade do Usuário autenticado via Google."""
    email: str
    nome: str = ''
    google_id: Optional[str] = None
    avatar_url: Optional[str] = None
    is_admin: bool = False
    id: Optional[int] = None


@dataclass
class Endereco:
    """Endereço de entrega (também usado como snapshot no pedido)."""
    rua: str = ''
    numero: str = ''
    cep: str = ''
    complemento: str = ''
    bairro: str = ''
    cidade: str = ''
    estado: str = ''
    padrao: bool = False
    id: Optional[int] = None

    def para_dict(self) -> Dict[str, str]:
        return {
            'cep': self.cep,
            'rua': self.rua,
            'numero': self.numero,
            'complemento': self.complemento,
            'bairro': self.bairro,
            'cidade': self.cidade,
            'estado': self.estado,
        }


@dataclass
class DadosCliente:
    """Snapshot dos dados do comprador informados no checkout."""
    nome: str = ''
    email: str = ''
    telefone: str = ''
    cpf: str = ''

    def para_dict(self) -> Dict[str, str]:
        return {'nome': self.nome, 'email': self.email, 'telefone': self.telefone, 'cpf': self.cpf}


@dataclass
class Produto:
    """Entidade do Produto (joia ou relógio) do catálogo."""
    nome: Optional[str] = None
    descricao: Optional[str] = None
    preco: Decimal = Decimal('0.00')
    tipo: Optional[str] = None
    metal: Optional[str] = None
    pedra: Optional[str] = None
    imagens: List[str] = field(default_factory=list)
    novidade: bool = False
    desconto_percentual: int = 0
    rotulo_desconto: Optional[str] = None
    id: Optional[int] = None

    @property
    def preco_com_desconto(self) -> Decimal:
        """Calcula o preço com desconto."""
        if self.desconto_percentual:
            fator = Decimal('1') - Decimal(self.desconto_percentual) / Decimal('100')
            return (self.preco * fator).quantize(Decimal('0.01'))
        return self.preco


@dataclass
class ItemCarrinho:
    """Item do carrinho: snapshot do produto, quantidade e seleção."""
    produto_id: int
    nome: str
    preco: Decimal
    quantidade: int = 1
    selecionado: bool = True
    imagem: Optional[str] = None

    @property
    def subtotal(self) -> Decimal:
        return self.preco * self.quantidade


@dataclass
class ItemPedido:
    """Snapshot de um item no momento da compra (imutável)."""
    produto_id: Optional[int]
    nome: str
    preco: Decimal
    quantidade: int

    @property
    def subtotal(self) -> Decimal:
        return self.preco * self.quantidade


@dataclass
class TransacaoPagamento:
    """Resultado da comunicação com o Gateway de Pagamento."""
    status: StatusPedido
    referencia_externa: Optional[str] = None
    qr_code: Optional[str] = None
    qr_code_base64: Optional[str] = None
    boleto_url: Optional[str] = None
    detalhe: Optional[str] = None

    @property
    def aceito(self) -> bool:
        """Aprovado ou aguardando compensação (Pix/Boleto)."""
        return self.status in (StatusPedido.APROVADO, StatusPedido.PENDENTE)


@dataclass
class Pedido:
    """Entidade do Pedido de Venda."""
    cliente: DadosCliente
    endereco_entrega: Endereco
    itens: List[ItemPedido]
    total: Decimal
    metodo_pagamento: str
    status: StatusPedido = StatusPedido.PENDENTE
    pagamento_id: Optional[str] = None
    codigo_cupom: Optional[str] = None
    codigo_rastreio: Optional[str] = None
    enviado_em: Optional[datetime] = None
    criado_em: Optional[datetime] = None
    atualizado_em: Optional[datetime] = None
    id: Optional[int] = None


@dataclass
class ConfiguracaoSite:
    chave: str
    valor: str
    id: Optional[int] = None


@dataclass
class Promocao:
    codigo: str
    desconto_percentual: int
    descricao: Optional[str] = None
    ativo: bool = True
    criado_em: Optional[datetime] = None
    id: Optional[int] = None


@dataclass
class Cupom:
    codigo: str
    desconto_percentual: int
    max_usos: Optional[int] = None
    usos: int = 0
    ativo: bool = True
    criado_em: Optional[datetime] = None
    id: Optional[int] = None

    @property
    def esgotado(self) -> bool:
        return self.max_usos is not None and self.usos >= self.max_usos

    def aplicar(self, valor: Decimal) -> Decimal:
        """Aplica o desconto percentual ao valor informado."""
        fator = Decimal('1') - Decimal(self.desconto_percentual) / Decimal('100')
        return (valor * fator).quantize(Decimal('0.01'))


@dataclass
class Banner:
    titulo: str
    imagem_url: str
    subtitulo: Optional[str] = None
    texto_cta: Optional[str] = None
    link_cta: Optional[str] = None
    ordem: int = 0
    ativo: bool = True
    criado_em: Optional[datetime] = None
    id: Optional[int] = None
