"""
Mapeadores (Mappers) para converter entre:
1. Modelos do Django ORM
2. Entidades de Domínio (joalheria.core.entities)
"""
from decimal import Decimal
from typing import Any, Optional, Type

from django.apps import apps
from django.db import models

# Importa as entidades do Core
from joalheria.core.entities import (
    Usuario as UsuarioEntity,
    Endereco as EnderecoEntity,
    DadosCliente,
    Produto as ProdutoEntity,
    Pedido as PedidoEntity,
    ItemPedido as ItemPedidoEntity,
    StatusPedido,
    ConfiguracaoSite as ConfiguracaoSiteEntity,
    Promocao as PromocaoEntity,
    Cupom as CupomEntity,
    Banner as BannerEntity,
)

# ====================================================================
# Uso de apps.get_model para evitar dependências circulares
# ====================================================================

def get_model(app_label: str, model_name: str):
    """Retorna um modelo do Django de forma segura (lazy loading)."""
    return apps.get_model(app_label, model_name)


# ====================================================================
# MAPERS DO CATÁLOGO
# ====================================================================

class ProdutoMapper:
    """Mapeador para Produto."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('catalog', 'Produto')

    @staticmethod
    def to_entity(model: Any) -> Optional[ProdutoEntity]:
        if not model: return None
        return ProdutoEntity(
            id=model.id,
            nome=model.nome,
            descricao=model.descricao,
            preco=model.preco,
            tipo=model.tipo,
            metal=model.metal,
            pedra=model.pedra,
            imagens=list(model.imagens or []),
            novidade=model.novidade,
            desconto_percentual=model.desconto_percentual,
            rotulo_desconto=model.rotulo_desconto,
        )

    @classmethod
    def to_model(cls, entity: ProdutoEntity, model: Optional[Any] = None) -> Any:
        """Converte Produto Entity para Produto Model."""
        if not model:
            # Se for um novo registro
            model = cls.model_class()()

        model.nome = entity.nome
        model.descricao = entity.descricao
        model.preco = Decimal(str(entity.preco or 0))
        model.tipo = entity.tipo
        model.metal = entity.metal
        model.pedra = entity.pedra
        model.imagens = list(entity.imagens or [])
        model.novidade = bool(entity.novidade)
        model.desconto_percentual = entity.desconto_percentual or 0
        model.rotulo_desconto = entity.rotulo_desconto
        return model


class BannerMapper:

    @staticmethod
    def to_entity(model: Any) -> Optional[BannerEntity]:
        if not model: return None
        return BannerEntity(
            id=model.id,
            titulo=model.titulo,
            subtitulo=model.subtitulo,
            imagem_url=model.imagem_url,
            texto_cta=model.texto_cta,
            link_cta=model.link_cta,
            ordem=model.ordem,
            ativo=model.ativo,
            criado_em=model.data_criacao,
        )


class ConfiguracaoSiteMapper:

    @staticmethod
    def to_entity(model: Any) -> Optional[ConfiguracaoSiteEntity]:
        if not model: return None
        return ConfiguracaoSiteEntity(id=model.id, chave=model.chave, valor=model.valor)


# ====================================================================
# MAPERS DE USUÁRIO E ENDEREÇO
# ====================================================================

class UsuarioMapper:
    """Mapeador para o Usuário."""

    @staticmethod
    def to_entity(model: Any) -> Optional[UsuarioEntity]:
        if not model: return None
        return UsuarioEntity(
            id=model.id,
            email=model.email,
            nome=model.nome,
            google_id=model.google_id,
            avatar_url=model.avatar_url,
            is_admin=model.is_staff,
        )


class EnderecoMapper:
    """Mapeador para Endereço salvo do usuário."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('infrastructure', 'Endereco')

    @staticmethod
    def to_entity(model: Any) -> Optional[EnderecoEntity]:
        if not model: return None
        return EnderecoEntity(
            id=model.id,
            cep=model.cep,
            rua=model.rua,
            numero=model.numero,
            complemento=model.complemento or '',
            bairro=model.bairro,
            cidade=model.cidade,
            estado=model.estado,
            padrao=model.padrao,
        )

    @classmethod
    def to_model(cls, entity: EnderecoEntity, usuario_id: int, model: Optional[Any] = None) -> Any:
        if not model:
            model = cls.model_class()(usuario_id=usuario_id)

        model.cep = entity.cep
        model.rua = entity.rua
        model.numero = entity.numero
        model.complemento = entity.complemento or None
        model.bairro = entity.bairro
        model.cidade = entity.cidade
        model.estado = entity.estado
        model.padrao = entity.padrao
        return model


# ====================================================================
# MAPERS DE PEDIDO
# ====================================================================

class ItemPedidoMapper:
    """Mapeador para ItemPedido."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('vendas', 'ItemPedido')

    @staticmethod
    def to_entity(model: Any) -> Optional[ItemPedidoEntity]:
        if not model: return None
        return ItemPedidoEntity(
            produto_id=model.produto_id,
            nome=model.nome_produto,
            preco=model.preco_unitario,
            quantidade=model.quantidade,
        )

    @classmethod
    def to_model(cls, entity: ItemPedidoEntity, pedido_id: int) -> Any:
        # Snapshot dos dados, o FK para Produto é apenas referência
        return cls.model_class()(
            pedido_id=pedido_id,
            produto_id=entity.produto_id,
            nome_produto=entity.nome,
            preco_unitario=entity.preco,
            quantidade=entity.quantidade,
            subtotal=entity.subtotal,
        )


class PedidoMapper:
    """Mapeador para Pedido."""

    @classmethod
    def model_class(cls) -> Type[models.Model]:
        return get_model('vendas', 'Pedido')

    @staticmethod
    def to_entity(model: Any) -> Optional[PedidoEntity]:
        """Converte Pedido Model para Pedido Entity, incluindo os snapshots."""
        if not model: return None

        cliente = DadosCliente(
            nome=model.nome_cliente,
            email=model.email_contato,
            telefone=model.telefone_contato,
            cpf=model.cpf_cliente,
        )
        endereco = EnderecoEntity(
            cep=model.cep_entrega,
            rua=model.rua_entrega,
            numero=model.numero_entrega,
            complemento=model.complemento_entrega or '',
            bairro=model.bairro_entrega,
            cidade=model.cidade_entrega,
            estado=model.estado_entrega,
        )
        itens = [ItemPedidoMapper.to_entity(item) for item in model.itens.all()]

        return PedidoEntity(
            id=model.id,
            cliente=cliente,
            endereco_entrega=endereco,
            itens=itens,
            total=model.total,
            metodo_pagamento=model.forma_pagamento,
            status=StatusPedido(model.status),
            pagamento_id=model.pagamento_id,
            codigo_cupom=model.codigo_cupom,
            codigo_rastreio=model.codigo_rastreio,
            enviado_em=model.enviado_em,
            criado_em=model.data_pedido,
            atualizado_em=model.data_modificacao,
        )

    @classmethod
    def to_model(cls, entity: PedidoEntity, model: Optional[Any] = None) -> Any:
        if not model:
            model = cls.model_class()()

        model.status = StatusPedido(entity.status).value
        model.total = entity.total
        model.forma_pagamento = entity.metodo_pagamento
        model.pagamento_id = entity.pagamento_id
        model.codigo_cupom = entity.codigo_cupom
        model.codigo_rastreio = entity.codigo_rastreio
        model.enviado_em = entity.enviado_em

        model.nome_cliente = entity.cliente.nome
        model.email_contato = entity.cliente.email
        model.telefone_contato = entity.cliente.telefone
        model.cpf_cliente = entity.cliente.cpf

        # Mapeia a Entidade Endereco para os campos snapshot do Model
        endereco = entity.endereco_entrega
        model.cep_entrega = endereco.cep
        model.rua_entrega = endereco.rua
        model.numero_entrega = endereco.numero
        model.complemento_entrega = endereco.complemento or None
        model.bairro_entrega = endereco.bairro
        model.cidade_entrega = endereco.cidade
        model.estado_entrega = (endereco.estado or '')[:2]
        return model


# ====================================================================
# MAPERS DE PROMOÇÕES E CUPONS
# ====================================================================

class PromocaoMapper:

    @staticmethod
    def to_entity(model: Any) -> Optional[PromocaoEntity]:
        if not model: return None
        return PromocaoEntity(
            id=model.id,
            codigo=model.codigo,
            descricao=model.descricao,
            desconto_percentual=model.desconto_percentual,
            ativo=model.ativo,
            criado_em=model.data_criacao,
        )


class CupomMapper:

    @staticmethod
    def to_entity(model: Any) -> Optional[CupomEntity]:
        if not model: return None
        return CupomEntity(
            id=model.id,
            codigo=model.codigo,
            desconto_percentual=model.desconto_percentual,
            max_usos=model.max_usos,
            usos=model.usos,
            ativo=model.ativo,
            criado_em=model.data_criacao,
        )
