"""
Camada de Infraestrutura: Implementação dos Repositórios.

Esta camada traduz as operações abstratas definidas nas Portas do Core
em chamadas concretas ao Django ORM.
"""
from typing import List, Optional
from datetime import datetime

from django.apps import apps
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import F, Prefetch, Q

# Importações da Camada CORE (ENTIDADES e PORTAS)
from joalheria.core.entities import (
    Produto, Pedido, Usuario, Endereco, StatusPedido,
    ConfiguracaoSite, Promocao, Cupom, Banner,
)
from joalheria.core.filtros import FiltroProdutos
from joalheria.core.ports import (
    IProdutoRepository,
    IPedidoRepository,
    IConfiguracaoRepository,
    IPromocaoRepository,
    ICupomRepository,
    IBannerRepository,
    IUsuarioRepository,
)
from joalheria.core.exceptions import (
    ProdutoNaoEncontradoError,
    PedidoNaoEncontradoError,
    CupomInvalidoError,
    DadosInvalidosError,
)

from .mappers import (
    ProdutoMapper, BannerMapper, ConfiguracaoSiteMapper, UsuarioMapper, EnderecoMapper,
    ItemPedidoMapper, PedidoMapper, PromocaoMapper, CupomMapper,
)


# Helper para Lazy Loading
def get_model(app_label, model_name):
    """Busca o modelo Django de forma segura (Lazy Loading)."""
    return apps.get_model(app_label, model_name)


# ====================================================================
# 1. CATÁLOGO E VITRINE
# ====================================================================

class ProdutoRepositoryDjango(IProdutoRepository):
    """Implementação do ProdutoRepository usando o Django ORM."""

    @property
    def ProdutoModel(self):
        return get_model('catalog', 'Produto')

    def buscar_por_id(self, produto_id: int) -> Optional[Produto]:
        try:
            return ProdutoMapper.to_entity(self.ProdutoModel.objects.get(pk=produto_id))
        except self.ProdutoModel.DoesNotExist:
            return None

    def buscar_por_filtro(self, filtro: FiltroProdutos) -> List[Produto]:
        qs = self.ProdutoModel.objects.filter(**filtro.condicoes()).order_by(filtro.ordenacao_orm())
        return [ProdutoMapper.to_entity(model) for model in qs]

    @transaction.atomic
    def salvar(self, produto: Produto) -> Produto:
        """Salva ou atualiza um Produto, convertendo a entidade para o modelo."""
        model = None
        if produto.id:
            try:
                model = self.ProdutoModel.objects.get(pk=produto.id)
            except self.ProdutoModel.DoesNotExist:
                raise ProdutoNaoEncontradoError(f"Produto ID {produto.id} não existe para atualização.")

        model = ProdutoMapper.to_model(produto, model)
        model.save()
        return ProdutoMapper.to_entity(model)

    def deletar(self, produto_id: int) -> bool:
        apagados, _ = self.ProdutoModel.objects.filter(pk=produto_id).delete()
        return apagados > 0


class BannerRepositoryDjango(IBannerRepository):

    @property
    def BannerModel(self):
        return get_model('catalog', 'Banner')

    def listar(self, somente_ativos: bool = False) -> List[Banner]:
        qs = self.BannerModel.objects.all()
        if somente_ativos:
            qs = qs.filter(ativo=True)
        return [BannerMapper.to_entity(model) for model in qs.order_by('ordem', 'id')]

    def criar(self, banner: Banner) -> Banner:
        model = self.BannerModel.objects.create(
            titulo=banner.titulo,
            subtitulo=banner.subtitulo,
            imagem_url=banner.imagem_url,
            texto_cta=banner.texto_cta,
            link_cta=banner.link_cta,
            ordem=banner.ordem,
            ativo=banner.ativo,
        )
        return BannerMapper.to_entity(model)

    def deletar(self, banner_id: int) -> bool:
        apagados, _ = self.BannerModel.objects.filter(pk=banner_id).delete()
        return apagados > 0


class ConfiguracaoRepositoryDjango(IConfiguracaoRepository):

    @property
    def ConfiguracaoModel(self):
        return get_model('catalog', 'ConfiguracaoSite')

    def listar(self) -> List[ConfiguracaoSite]:
        return [ConfiguracaoSiteMapper.to_entity(m) for m in self.ConfiguracaoModel.objects.all()]

    def salvar(self, chave: str, valor: str) -> ConfiguracaoSite:
        model, _ = self.ConfiguracaoModel.objects.update_or_create(chave=chave, defaults={'valor': valor})
        return ConfiguracaoSiteMapper.to_entity(model)


# ====================================================================
# 2. PEDIDOS
# ====================================================================

class PedidoRepositoryDjango(IPedidoRepository):
    """Implementação do PedidoRepository usando o Django ORM."""

    @property
    def PedidoModel(self):
        return get_model('vendas', 'Pedido')

    @property
    def ItemPedidoModel(self):
        return get_model('vendas', 'ItemPedido')

    def _qs(self):
        return self.PedidoModel.objects.prefetch_related(
            Prefetch('itens', queryset=self.ItemPedidoModel.objects.order_by('id'))
        )

    def _buscar(self, **filtros) -> Optional[Pedido]:
        return PedidoMapper.to_entity(self._qs().filter(**filtros).first())

    @transaction.atomic
    def criar(self, pedido: Pedido) -> Pedido:
        """Cria o pedido e o snapshot dos itens atomicamente."""
        model = PedidoMapper.to_model(pedido)
        model.save()

        self.ItemPedidoModel.objects.bulk_create([
            ItemPedidoMapper.to_model(item, pedido_id=model.id) for item in pedido.itens
        ])
        return self.buscar_por_id(model.id)

    def buscar_por_id(self, pedido_id: int) -> Optional[Pedido]:
        return self._buscar(pk=pedido_id)

    def buscar_por_codigo_rastreio(self, codigo: str) -> Optional[Pedido]:
        return self._buscar(codigo_rastreio=codigo)

    def buscar_por_pagamento_id(self, pagamento_id: str) -> Optional[Pedido]:
        return self._buscar(pagamento_id=str(pagamento_id))

    def listar_todos(self) -> List[Pedido]:
        return [PedidoMapper.to_entity(m) for m in self._qs().order_by('-data_pedido', '-id')]

    def listar_por_email(self, email: str) -> List[Pedido]:
        qs = self._qs().filter(email_contato__iexact=email).order_by('-data_pedido', '-id')
        return [PedidoMapper.to_entity(m) for m in qs]

    def listar_aprovados_sem_rastreio(self) -> List[Pedido]:
        qs = self._qs().filter(status=StatusPedido.APROVADO.value, codigo_rastreio__isnull=True)
        return [PedidoMapper.to_entity(m) for m in qs.order_by('id')]

    def atualizar_status(self, pedido_id: int, status: StatusPedido,
                         pagamento_id: Optional[str] = None) -> Optional[Pedido]:
        campos = {'status': StatusPedido(status).value}
        if pagamento_id:
            campos['pagamento_id'] = str(pagamento_id)
        # update() não dispara auto_now; data_modificacao vai no save()
        model = self.PedidoModel.objects.filter(pk=pedido_id).first()
        if not model:
            return None
        for campo, valor in campos.items():
            setattr(model, campo, valor)
        model.save(update_fields=[*campos.keys(), 'data_modificacao'])
        return self.buscar_por_id(pedido_id)

    def registrar_envio(self, pedido_id: int, codigo_rastreio: str, enviado_em: datetime) -> Pedido:
        atualizados = self.PedidoModel.objects.filter(pk=pedido_id).update(
            codigo_rastreio=codigo_rastreio, enviado_em=enviado_em
        )
        if not atualizados:
            raise PedidoNaoEncontradoError(f"Pedido ID {pedido_id} não encontrado.")
        return self.buscar_por_id(pedido_id)


# ====================================================================
# 3. PROMOÇÕES E CUPONS
# ====================================================================

class PromocaoRepositoryDjango(IPromocaoRepository):

    @property
    def PromocaoModel(self):
        return get_model('vendas', 'Promocao')

    def listar(self) -> List[Promocao]:
        return [PromocaoMapper.to_entity(m) for m in self.PromocaoModel.objects.all()]

    def criar(self, promocao: Promocao) -> Promocao:
        if self.PromocaoModel.objects.filter(codigo=promocao.codigo).exists():
            raise DadosInvalidosError(f"Já existe uma promoção com o código {promocao.codigo}.", campos=['code'])
        model = self.PromocaoModel.objects.create(
            codigo=promocao.codigo,
            descricao=promocao.descricao,
            desconto_percentual=promocao.desconto_percentual,
            ativo=promocao.ativo,
        )
        return PromocaoMapper.to_entity(model)

    def deletar(self, promocao_id: int) -> bool:
        apagados, _ = self.PromocaoModel.objects.filter(pk=promocao_id).delete()
        return apagados > 0


class CupomRepositoryDjango(ICupomRepository):

    @property
    def CupomModel(self):
        return get_model('vendas', 'Cupom')

    def listar(self) -> List[Cupom]:
        return [CupomMapper.to_entity(m) for m in self.CupomModel.objects.all()]

    def buscar_por_codigo(self, codigo: str) -> Optional[Cupom]:
        return CupomMapper.to_entity(self.CupomModel.objects.filter(codigo__iexact=codigo).first())

    def criar(self, cupom: Cupom) -> Cupom:
        if self.CupomModel.objects.filter(codigo__iexact=cupom.codigo).exists():
            raise DadosInvalidosError(f"Já existe um cupom com o código {cupom.codigo}.", campos=['code'])
        model = self.CupomModel.objects.create(
            codigo=cupom.codigo,
            desconto_percentual=cupom.desconto_percentual,
            max_usos=cupom.max_usos,
            ativo=cupom.ativo,
        )
        return CupomMapper.to_entity(model)

    def deletar(self, cupom_id: int) -> bool:
        apagados, _ = self.CupomModel.objects.filter(pk=cupom_id).delete()
        return apagados > 0

    @transaction.atomic
    def registrar_uso(self, codigo: str) -> Cupom:
        """
        Incrementa o contador de usos em um único UPDATE condicional: só conta
        se o cupom estiver ativo e abaixo de max_usos no momento da escrita.
        """
        disponivel = Q(max_usos__isnull=True) | Q(usos__lt=F('max_usos'))
        atualizados = self.CupomModel.objects.filter(
            disponivel, codigo__iexact=codigo, ativo=True
        ).update(usos=F('usos') + 1)
        if not atualizados:
            raise CupomInvalidoError(f"Cupom '{codigo}' inválido ou esgotado.")
        return self.buscar_por_codigo(codigo)

    def liberar_uso(self, codigo: str) -> None:
        self.CupomModel.objects.filter(codigo__iexact=codigo, usos__gt=0).update(usos=F('usos') - 1)


# ====================================================================
# 4. USUÁRIOS, ENDEREÇOS E FAVORITOS
# ====================================================================

class UsuarioRepositoryDjango(IUsuarioRepository):

    @property
    def UsuarioModel(self):
        return get_user_model()

    @property
    def EnderecoModel(self):
        return get_model('infrastructure', 'Endereco')

    @property
    def FavoritoModel(self):
        return get_model('infrastructure', 'Favorito')

    def buscar_por_google_id(self, google_id: str) -> Optional[Usuario]:
        return UsuarioMapper.to_entity(self.UsuarioModel.objects.filter(google_id=google_id).first())

    def buscar_por_email(self, email: str) -> Optional[Usuario]:
        return UsuarioMapper.to_entity(self.UsuarioModel.objects.filter(email__iexact=email).first())

    def criar(self, usuario: Usuario) -> Usuario:
        model = self.UsuarioModel.objects.create_user(
            email=usuario.email,
            nome=usuario.nome,
            google_id=usuario.google_id,
            avatar_url=usuario.avatar_url,
        )
        return UsuarioMapper.to_entity(model)

    def vincular_google(self, usuario_id: int, google_id: str, avatar_url: Optional[str]) -> Usuario:
        model = self.UsuarioModel.objects.get(pk=usuario_id)
        model.google_id = google_id
        if avatar_url:
            model.avatar_url = avatar_url
        model.save(update_fields=['google_id', 'avatar_url'])
        return UsuarioMapper.to_entity(model)

    def listar_enderecos(self, usuario_id: int) -> List[Endereco]:
        qs = self.EnderecoModel.objects.filter(usuario_id=usuario_id)
        return [EnderecoMapper.to_entity(m) for m in qs]

    @transaction.atomic
    def salvar_endereco(self, usuario_id: int, endereco: Endereco) -> Endereco:
        """Salva o endereço; quando padrão, desmarca os demais do usuário."""
        model = None
        if endereco.id:
            model = self.EnderecoModel.objects.filter(pk=endereco.id, usuario_id=usuario_id).first()
        if endereco.padrao:
            self.EnderecoModel.objects.filter(usuario_id=usuario_id).update(padrao=False)

        model = EnderecoMapper.to_model(endereco, usuario_id, model)
        model.save()
        return EnderecoMapper.to_entity(model)

    def listar_favoritos(self, usuario_id: int) -> List[int]:
        return list(
            self.FavoritoModel.objects.filter(usuario_id=usuario_id)
            .order_by('-data_criacao').values_list('produto_id', flat=True)
        )

    def adicionar_favorito(self, usuario_id: int, produto_id: int) -> None:
        self.FavoritoModel.objects.get_or_create(usuario_id=usuario_id, produto_id=produto_id)

    def remover_favorito(self, usuario_id: int, produto_id: int) -> None:
        self.FavoritoModel.objects.filter(usuario_id=usuario_id, produto_id=produto_id).delete()
