from django.core.validators import MaxValueValidator
from django.db import models
from decimal import Decimal

class Pedido(models.Model):
    """
    Modelo que representa um pedido/venda no sistema.
    Cliente, endereço e itens são snapshots do momento da compra.
    """
    STATUS_CHOICES = [
        ('pending', 'Pendente'),
        ('approved', 'Aprovado'),
        ('rejected', 'Rejeitado'),
        ('refunded', 'Estornado'),
    ]

    FORMA_PAGAMENTO_CHOICES = [
        ('credit_card', 'Cartão de Crédito'),
        ('debit_card', 'Cartão de Débito'),
        ('pix', 'PIX'),
        ('boleto', 'Boleto'),
    ]

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending', db_index=True)
    data_pedido = models.DateTimeField(auto_now_add=True)
    data_modificacao = models.DateTimeField(auto_now=True)

    # Valores e Pagamento
    total = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    forma_pagamento = models.CharField(max_length=20, choices=FORMA_PAGAMENTO_CHOICES)
    pagamento_id = models.CharField(max_length=100, blank=True, null=True, db_index=True)
    codigo_cupom = models.CharField(max_length=50, blank=True, null=True)

    # Rastreamento (o status de rastreio é derivado, nunca gravado)
    codigo_rastreio = models.CharField(max_length=20, blank=True, null=True, unique=True)
    enviado_em = models.DateTimeField(blank=True, null=True)

    # Dados do Cliente (snapshot)
    nome_cliente = models.CharField(max_length=255)
    email_contato = models.EmailField(db_index=True)
    telefone_contato = models.CharField(max_length=20)
    cpf_cliente = models.CharField(max_length=14)

    # Dados de Entrega (snapshot do endereço no momento do pedido)
    cep_entrega = models.CharField(max_length=9, blank=True)
    rua_entrega = models.CharField(max_length=255)
    numero_entrega = models.CharField(max_length=10)
    complemento_entrega = models.CharField(max_length=100, blank=True, null=True)
    bairro_entrega = models.CharField(max_length=100, blank=True)
    cidade_entrega = models.CharField(max_length=100, blank=True)
    estado_entrega = models.CharField(max_length=2, blank=True)

    class Meta:
        verbose_name = 'Pedido'
        verbose_name_plural = 'Pedidos'
        db_table = 'vendas_pedido'
        ordering = ['-data_pedido', '-id']

    def __str__(self):
        return f"Pedido #{self.id} - {self.email_contato}"


class ItemPedido(models.Model):
    """
    Modelo que representa um item dentro de um pedido.
    Mantém um snapshot dos dados do produto no momento da compra.
    """
    pedido = models.ForeignKey(Pedido, related_name='itens', on_delete=models.CASCADE)
    produto = models.ForeignKey(
        'catalog.Produto', on_delete=models.SET_NULL, null=True, blank=True, related_name='itens_venda'
    )

    # Snapshot dos dados do produto
    nome_produto = models.CharField(max_length=255)
    preco_unitario = models.DecimalField(max_digits=10, decimal_places=2)
    quantidade = models.PositiveIntegerField()
    subtotal = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        verbose_name = 'Item do Pedido'
        verbose_name_plural = 'Itens do Pedido'
        db_table = 'vendas_item_pedido'

    def __str__(self):
        return f"{self.quantidade}x {self.nome_produto} em Pedido #{self.pedido_id}"

    def save(self, *args, **kwargs):
        """Calcula o subtotal antes de salvar."""
        self.subtotal = self.preco_unitario * self.quantidade
        super().save(*args, **kwargs)


class Promocao(models.Model):
    codigo = models.CharField(max_length=50, unique=True)
    descricao = models.TextField(blank=True, null=True)
    desconto_percentual = models.PositiveIntegerField(validators=[MaxValueValidator(100)])
    ativo = models.BooleanField(default=True)
    data_criacao = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Promoção'
        verbose_name_plural = 'Promoções'
        db_table = 'vendas_promocao'
        ordering = ['-data_criacao', '-id']

    def __str__(self):
        return self.codigo


class Cupom(models.Model):
    codigo = models.CharField(max_length=50, unique=True)
    desconto_percentual = models.PositiveIntegerField(validators=[MaxValueValidator(100)])
    max_usos = models.PositiveIntegerField(blank=True, null=True, help_text='Vazio = ilimitado')
    usos = models.PositiveIntegerField(default=0)
    ativo = models.BooleanField(default=True)
    data_criacao = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Cupom'
        verbose_name_plural = 'Cupons'
        db_table = 'vendas_cupom'
        ordering = ['-data_criacao', '-id']

    def __str__(self):
        return self.codigo
