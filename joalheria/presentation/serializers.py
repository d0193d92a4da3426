from rest_framework import serializers

from joalheria.core.checkout import METODOS_VALIDOS
from joalheria.core.entities import StatusPedido


# ====================================================================
# SERIALIZERS DO CATÁLOGO
# Trabalham sobre as Entidades do Core (não sobre os Models).
# ====================================================================

class ProdutoSerializer(serializers.Serializer):
    """
    Serializer do Produto. Os nomes expostos na API seguem o padrão camelCase
    e o `source` aponta para o atributo da Entidade.
    """
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(source='nome', max_length=255, required=False, allow_null=True)
    description = serializers.CharField(source='descricao', required=False, allow_blank=True, allow_null=True)
    price = serializers.DecimalField(source='preco', max_digits=10, decimal_places=2, required=False, min_value=0)
    type = serializers.CharField(source='tipo', max_length=50, required=False, allow_null=True)
    metal = serializers.CharField(max_length=50, required=False, allow_null=True)
    stone = serializers.CharField(source='pedra', max_length=50, required=False, allow_null=True)
    imageUrls = serializers.ListField(source='imagens', child=serializers.CharField(), required=False)
    isNew = serializers.BooleanField(source='novidade', required=False)
    discountPercent = serializers.IntegerField(source='desconto_percentual', required=False, min_value=0, max_value=100)
    discountLabel = serializers.CharField(source='rotulo_desconto', max_length=100, required=False, allow_null=True, allow_blank=True)
    finalPrice = serializers.DecimalField(source='preco_com_desconto', max_digits=10, decimal_places=2, read_only=True)


class ConfiguracaoSiteSerializer(serializers.Serializer):
    key = serializers.CharField(source='chave', read_only=True)
    value = serializers.CharField(source='valor', allow_blank=True)


class BannerSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    title = serializers.CharField(source='titulo', max_length=200)
    subtitle = serializers.CharField(source='subtitulo', max_length=255, required=False, allow_blank=True, allow_null=True)
    imageUrl = serializers.CharField(source='imagem_url', max_length=500)
    ctaText = serializers.CharField(source='texto_cta', max_length=100, required=False, allow_blank=True, allow_null=True)
    ctaLink = serializers.CharField(source='link_cta', max_length=500, required=False, allow_blank=True, allow_null=True)
    order = serializers.IntegerField(source='ordem', required=False, default=0)
    active = serializers.BooleanField(source='ativo', required=False, default=True)
    createdAt = serializers.DateTimeField(source='criado_em', read_only=True)


# ====================================================================
# SERIALIZERS DE PROMOÇÕES E CUPONS
# ====================================================================

class PromocaoSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    code = serializers.CharField(source='codigo', max_length=50)
    description = serializers.CharField(source='descricao', required=False, allow_blank=True, allow_null=True)
    discountPercent = serializers.IntegerField(source='desconto_percentual', min_value=0, max_value=100)
    active = serializers.BooleanField(source='ativo', required=False, default=True)
    createdAt = serializers.DateTimeField(source='criado_em', read_only=True)


class CupomSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    code = serializers.CharField(source='codigo', max_length=50)
    discountPercent = serializers.IntegerField(source='desconto_percentual', min_value=0, max_value=100)
    maxUses = serializers.IntegerField(source='max_usos', required=False, allow_null=True, min_value=1)
    uses = serializers.IntegerField(source='usos', read_only=True)
    active = serializers.BooleanField(source='ativo', required=False, default=True)
    createdAt = serializers.DateTimeField(source='criado_em', read_only=True)


class ValidarCupomSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=50)


# ====================================================================
# SERIALIZERS PARA O CARRINHO
# ====================================================================

class ItemCarrinhoSerializer(serializers.Serializer):
    """Item do carrinho de sessão (Entidade ItemCarrinho)."""
    productId = serializers.IntegerField(source='produto_id')
    name = serializers.CharField(source='nome')
    price = serializers.DecimalField(source='preco', max_digits=10, decimal_places=2)
    quantity = serializers.IntegerField(source='quantidade')
    selected = serializers.BooleanField(source='selecionado')
    image = serializers.CharField(source='imagem', allow_null=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)


class AdicionarItemCarrinhoSerializer(serializers.Serializer):
    productId = serializers.IntegerField()
    quantity = serializers.IntegerField(required=False, default=1)


class AtualizarItemCarrinhoSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(required=False)
    toggle = serializers.BooleanField(required=False, default=False)


def carrinho_para_resposta(carrinho) -> dict:
    return {
        'items': ItemCarrinhoSerializer(carrinho.itens, many=True).data,
        'total': str(carrinho.total()),
        'selectedTotal': str(carrinho.total_selecionado()),
        'count': len(carrinho),
        'units': carrinho.total_unidades(),
    }


# ====================================================================
# SERIALIZERS PARA CHECKOUT
# ====================================================================

class DadosClienteSerializer(serializers.Serializer):
    name = serializers.CharField(source='nome', max_length=255, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    # Aceitam o valor digitado; a máscara reduz a 15 (telefone) e 14 (cpf) caracteres
    phone = serializers.CharField(source='telefone', max_length=20, required=False, allow_blank=True)
    cpf = serializers.CharField(max_length=20, required=False, allow_blank=True)


class EnderecoSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    cep = serializers.CharField(max_length=9, required=False, allow_blank=True)
    street = serializers.CharField(source='rua', max_length=255, required=False, allow_blank=True)
    number = serializers.CharField(source='numero', max_length=10, required=False, allow_blank=True)
    complement = serializers.CharField(source='complemento', max_length=100, required=False, allow_blank=True)
    neighborhood = serializers.CharField(source='bairro', max_length=100, required=False, allow_blank=True)
    city = serializers.CharField(source='cidade', max_length=100, required=False, allow_blank=True)
    state = serializers.CharField(source='estado', max_length=2, required=False, allow_blank=True)
    isDefault = serializers.BooleanField(source='padrao', read_only=True)


class CheckoutSerializer(serializers.Serializer):
    """
    Dados aceitos pelo sequenciador do checkout. Todos os blocos são
    opcionais: cada requisição envia apenas o que a etapa corrente edita.
    """
    customer = DadosClienteSerializer(required=False)
    address = EnderecoSerializer(required=False)
    paymentMethod = serializers.ChoiceField(choices=METODOS_VALIDOS, required=False)
    couponCode = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)
    # Dados do cartão tokenizado (token, installments, payment_method_id...)
    payment = serializers.DictField(required=False)


def checkout_para_resposta(sequenciador) -> dict:
    cliente = sequenciador.cliente
    return {
        'step': int(sequenciador.etapa),
        'customer': DadosClienteSerializer(cliente).data,
        'address': EnderecoSerializer(sequenciador.endereco).data,
        'paymentMethod': sequenciador.metodo_pagamento,
        'couponCode': sequenciador.codigo_cupom,
        'selectedTotal': str(sequenciador.carrinho.total_selecionado()),
        'error': sequenciador.erro,
        'result': sequenciador.resultado,
    }


class ItemPagamentoSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField(required=False, allow_blank=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, required=False)
    quantity = serializers.IntegerField(min_value=1, default=1)


class DadosCompradorSerializer(serializers.Serializer):
    cpf = serializers.CharField(max_length=20)
    phone = serializers.CharField(max_length=20)
    address = EnderecoSerializer()


class CriarPagamentoSerializer(serializers.Serializer):
    """Corpo do POST /api/payment/create (checkout em uma única chamada)."""
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    email = serializers.EmailField()
    name = serializers.CharField(max_length=255)
    paymentMethod = serializers.ChoiceField(choices=METODOS_VALIDOS)
    customerData = DadosCompradorSerializer()
    items = ItemPagamentoSerializer(many=True, allow_empty=False)
    token = serializers.CharField(required=False, allow_blank=True)
    installments = serializers.IntegerField(required=False, min_value=1)
    paymentMethodId = serializers.CharField(required=False, allow_blank=True)
    couponCode = serializers.CharField(max_length=50, required=False, allow_blank=True, allow_null=True)


# ====================================================================
# SERIALIZERS DE PEDIDO E USUÁRIO
# ====================================================================

class ItemPedidoSerializer(serializers.Serializer):
    productId = serializers.IntegerField(source='produto_id', allow_null=True)
    name = serializers.CharField(source='nome')
    price = serializers.DecimalField(source='preco', max_digits=10, decimal_places=2)
    quantity = serializers.IntegerField(source='quantidade')
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2)


class PedidoSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    status = serializers.SerializerMethodField()
    total = serializers.DecimalField(max_digits=12, decimal_places=2)
    paymentMethod = serializers.CharField(source='metodo_pagamento')
    paymentId = serializers.CharField(source='pagamento_id', allow_null=True)
    couponCode = serializers.CharField(source='codigo_cupom', allow_null=True)
    trackingCode = serializers.CharField(source='codigo_rastreio', allow_null=True)
    shippedAt = serializers.DateTimeField(source='enviado_em', allow_null=True)
    createdAt = serializers.DateTimeField(source='criado_em', allow_null=True)
    updatedAt = serializers.DateTimeField(source='atualizado_em', allow_null=True)
    customer = DadosClienteSerializer(source='cliente')
    shippingAddress = EnderecoSerializer(source='endereco_entrega')
    items = ItemPedidoSerializer(source='itens', many=True)

    def get_status(self, pedido) -> str:
        return StatusPedido(pedido.status).value


class AtualizarStatusPedidoSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[s.value for s in StatusPedido])


class UsuarioSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    email = serializers.EmailField()
    name = serializers.CharField(source='nome')
    avatarUrl = serializers.CharField(source='avatar_url', allow_null=True)
    isAdmin = serializers.BooleanField(source='is_admin')


class FavoritoSerializer(serializers.Serializer):
    productId = serializers.IntegerField()


class UploadSerializer(serializers.Serializer):
    file = serializers.FileField()
