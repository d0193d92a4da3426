import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Produto',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nome', models.CharField(blank=True, max_length=255, null=True, verbose_name='Nome do Produto')),
                ('descricao', models.TextField(blank=True, null=True, verbose_name='Descrição Detalhada')),
                ('preco', models.DecimalField(decimal_places=2, default=0, max_digits=10, verbose_name='Preço de Venda')),
                ('desconto_percentual', models.PositiveIntegerField(default=0, help_text='Desconto em porcentagem (0 a 100)', validators=[django.core.validators.MaxValueValidator(100)])),
                ('rotulo_desconto', models.CharField(blank=True, max_length=100, null=True, verbose_name='Rótulo do Desconto')),
                ('tipo', models.CharField(blank=True, db_index=True, max_length=50, null=True, verbose_name='Tipo')),
                ('metal', models.CharField(blank=True, db_index=True, max_length=50, null=True, verbose_name='Metal')),
                ('pedra', models.CharField(blank=True, db_index=True, max_length=50, null=True, verbose_name='Pedra')),
                ('imagens', models.JSONField(blank=True, default=list, verbose_name='Imagens')),
                ('novidade', models.BooleanField(default=False, verbose_name='Novidade')),
                ('data_criacao', models.DateTimeField(auto_now_add=True)),
                ('data_atualizacao', models.DateTimeField(auto_now=True, null=True)),
            ],
            options={
                'verbose_name': 'Produto',
                'verbose_name_plural': 'Produtos',
                'db_table': 'catalogo_produto',
                'ordering': ['-id'],
            },
        ),
        migrations.CreateModel(
            name='Banner',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('titulo', models.CharField(max_length=200, verbose_name='Título')),
                ('subtitulo', models.CharField(blank=True, max_length=255, null=True, verbose_name='Subtítulo')),
                ('imagem_url', models.CharField(max_length=500, verbose_name='URL da Imagem')),
                ('texto_cta', models.CharField(blank=True, max_length=100, null=True, verbose_name='Texto do Botão')),
                ('link_cta', models.CharField(blank=True, max_length=500, null=True, verbose_name='Link do Botão')),
                ('ordem', models.IntegerField(default=0, verbose_name='Ordem de Exibição')),
                ('ativo', models.BooleanField(default=True)),
                ('data_criacao', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Banner',
                'verbose_name_plural': 'Banners',
                'db_table': 'catalogo_banner',
                'ordering': ['ordem', 'id'],
            },
        ),
        migrations.CreateModel(
            name='ConfiguracaoSite',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('chave', models.CharField(max_length=100, unique=True, verbose_name='Chave')),
                ('valor', models.TextField(verbose_name='Valor')),
            ],
            options={
                'verbose_name': 'Configuração do Site',
                'verbose_name_plural': 'Configurações do Site',
                'db_table': 'catalogo_configuracao_site',
                'ordering': ['chave'],
            },
        ),
    ]
