# Configuração da interface administrativa do Django para os modelos da Joalheria.

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from joalheria.catalog.models import Produto, Banner, ConfiguracaoSite
from joalheria.vendas.models import Pedido, ItemPedido, Promocao, Cupom
from joalheria.infrastructure.models import Usuario, Endereco, Favorito
from .forms import UsuarioCreationForm, UsuarioChangeForm

# ====================================================================
# 1. ADMIN PERSONALIZADO PARA USUÁRIOS (login por e-mail/Google)
# ====================================================================

class EnderecoInline(admin.TabularInline):
    model = Endereco
    extra = 0


@admin.register(Usuario)
class UsuarioAdmin(BaseUserAdmin):
    """O modelo Usuario não tem 'username': os fieldsets são redefinidos por completo."""

    form = UsuarioChangeForm
    add_form = UsuarioCreationForm

    list_display = ('email', 'nome', 'google_id', 'is_staff', 'is_active', 'date_joined')
    list_filter = ('is_staff', 'is_active')
    search_fields = ('email', 'nome')
    ordering = ('email',)
    inlines = [EnderecoInline]

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Perfil', {'fields': ('nome', 'google_id', 'avatar_url')}),
        ('Permissões', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Datas', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'nome', 'password1', 'password2'),
        }),
    )


@admin.register(Favorito)
class FavoritoAdmin(admin.ModelAdmin):
    list_display = ('usuario', 'produto', 'data_criacao')
    search_fields = ('usuario__email', 'produto__nome')


# ====================================================================
# 2. ADMIN PARA O CATÁLOGO
# ====================================================================

@admin.register(Produto)
class ProdutoAdmin(admin.ModelAdmin):
    list_display = ('nome', 'preco', 'desconto_percentual', 'tipo', 'metal', 'pedra', 'novidade', 'data_criacao')
    list_filter = ('tipo', 'metal', 'pedra', 'novidade')
    search_fields = ('nome', 'descricao', 'id')
    fieldsets = (
        ('Informações Básicas', {
            'fields': ('nome', 'descricao', 'preco', 'imagens', 'novidade')
        }),
        ('Desconto', {
            'fields': ('desconto_percentual', 'rotulo_desconto'),
        }),
        ('Classificação', {
            'fields': ('tipo', 'metal', 'pedra'),
        }),
    )


@admin.register(Banner)
class BannerAdmin(admin.ModelAdmin):
    list_display = ('titulo', 'ordem', 'ativo', 'data_criacao')
    list_editable = ('ordem', 'ativo')
    list_filter = ('ativo',)


@admin.register(ConfiguracaoSite)
class ConfiguracaoSiteAdmin(admin.ModelAdmin):
    list_display = ('chave', 'valor')
    search_fields = ('chave',)


# ====================================================================
# 3. ADMIN PARA PEDIDOS, PROMOÇÕES E CUPONS
# ====================================================================

class ItemPedidoInline(admin.TabularInline):
    """Exibe os itens comprados dentro do detalhe do Pedido."""
    model = ItemPedido
    readonly_fields = ('produto', 'nome_produto', 'preco_unitario', 'quantidade', 'subtotal')
    extra = 0
    can_delete = False


@admin.register(Pedido)
class PedidoAdmin(admin.ModelAdmin):
    list_display = ('id', 'nome_cliente', 'email_contato', 'data_pedido', 'total', 'status', 'forma_pagamento', 'codigo_rastreio')
    list_filter = ('status', 'forma_pagamento', 'data_pedido')
    search_fields = ('id', 'email_contato', 'nome_cliente', 'codigo_rastreio', 'pagamento_id')
    date_hierarchy = 'data_pedido'
    inlines = [ItemPedidoInline]

    # Snapshot do checkout: somente o status é editável
    readonly_fields = (
        'data_pedido',
        'total',
        'forma_pagamento',
        'pagamento_id',
        'codigo_cupom',
        'codigo_rastreio',
        'enviado_em',
        'nome_cliente',
        'email_contato',
        'telefone_contato',
        'cpf_cliente',
        'cep_entrega',
        'rua_entrega',
        'numero_entrega',
        'complemento_entrega',
        'bairro_entrega',
        'cidade_entrega',
        'estado_entrega',
    )

    def has_add_permission(self, request):
        """Impedir a criação de pedidos pela interface do Admin."""
        return False


@admin.register(Promocao)
class PromocaoAdmin(admin.ModelAdmin):
    list_display = ('codigo', 'desconto_percentual', 'ativo', 'data_criacao')
    list_filter = ('ativo',)
    search_fields = ('codigo',)


@admin.register(Cupom)
class CupomAdmin(admin.ModelAdmin):
    list_display = ('codigo', 'desconto_percentual', 'usos', 'max_usos', 'ativo', 'data_criacao')
    list_filter = ('ativo',)
    search_fields = ('codigo',)
    readonly_fields = ('usos',)
