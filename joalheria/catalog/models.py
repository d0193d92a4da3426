from django.core.validators import MaxValueValidator
from django.db import models

# ====================================================================
# 1. Produto (Joia ou Relógio)
# ====================================================================

class Produto(models.Model):
    """Modelo para representar um produto no catálogo."""

    nome = models.CharField(max_length=255, blank=True, null=True, verbose_name="Nome do Produto")
    descricao = models.TextField(blank=True, null=True, verbose_name="Descrição Detalhada")

    # Preço e Desconto
    preco = models.DecimalField(max_digits=10, decimal_places=2, default=0, verbose_name="Preço de Venda")
    desconto_percentual = models.PositiveIntegerField(
        default=0, validators=[MaxValueValidator(100)], help_text='Desconto em porcentagem (0 a 100)'
    )
    rotulo_desconto = models.CharField(max_length=100, blank=True, null=True, verbose_name="Rótulo do Desconto")

    # Atributos filtráveis
    tipo = models.CharField(max_length=50, blank=True, null=True, db_index=True, verbose_name="Tipo")
    metal = models.CharField(max_length=50, blank=True, null=True, db_index=True, verbose_name="Metal")
    pedra = models.CharField(max_length=50, blank=True, null=True, db_index=True, verbose_name="Pedra")

    # Lista de URLs das imagens, a primeira é a principal
    imagens = models.JSONField(default=list, blank=True, verbose_name="Imagens")
    novidade = models.BooleanField(default=False, verbose_name="Novidade")

    data_criacao = models.DateTimeField(auto_now_add=True)
    data_atualizacao = models.DateTimeField(auto_now=True, null=True)

    class Meta:
        verbose_name = "Produto"
        verbose_name_plural = "Produtos"
        ordering = ['-id']
        db_table = 'catalogo_produto'

    def __str__(self):
        return self.nome or f"Produto #{self.pk}"

# ====================================================================
# 2. Banner da Home
# ====================================================================

class Banner(models.Model):
    titulo = models.CharField(max_length=200, verbose_name="Título")
    subtitulo = models.CharField(max_length=255, blank=True, null=True, verbose_name="Subtítulo")
    imagem_url = models.CharField(max_length=500, verbose_name="URL da Imagem")
    texto_cta = models.CharField(max_length=100, blank=True, null=True, verbose_name="Texto do Botão")
    link_cta = models.CharField(max_length=500, blank=True, null=True, verbose_name="Link do Botão")
    ordem = models.IntegerField(default=0, verbose_name="Ordem de Exibição")
    ativo = models.BooleanField(default=True)
    data_criacao = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Banner"
        verbose_name_plural = "Banners"
        ordering = ['ordem', 'id']
        db_table = 'catalogo_banner'

    def __str__(self):
        return self.titulo

# ====================================================================
# 3. Configurações do Site (chave/valor)
# ====================================================================

class ConfiguracaoSite(models.Model):
    """Textos e imagens editáveis da vitrine (ex: hero_title, hero_image)."""
    chave = models.CharField(max_length=100, unique=True, verbose_name="Chave")
    valor = models.TextField(verbose_name="Valor")

    class Meta:
        verbose_name = "Configuração do Site"
        verbose_name_plural = "Configurações do Site"
        ordering = ['chave']
        db_table = 'catalogo_configuracao_site'

    def __str__(self):
        return self.chave
