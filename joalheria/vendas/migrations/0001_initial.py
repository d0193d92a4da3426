import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Pedido',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('pending', 'Pendente'), ('approved', 'Aprovado'), ('rejected', 'Rejeitado'), ('refunded', 'Estornado')], db_index=True, default='pending', max_length=20)),
                ('data_pedido', models.DateTimeField(auto_now_add=True)),
                ('data_modificacao', models.DateTimeField(auto_now=True)),
                ('total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('forma_pagamento', models.CharField(choices=[('credit_card', 'Cartão de Crédito'), ('debit_card', 'Cartão de Débito'), ('pix', 'PIX'), ('boleto', 'Boleto')], max_length=20)),
                ('pagamento_id', models.CharField(blank=True, db_index=True, max_length=100, null=True)),
                ('codigo_cupom', models.CharField(blank=True, max_length=50, null=True)),
                ('codigo_rastreio', models.CharField(blank=True, max_length=20, null=True, unique=True)),
                ('enviado_em', models.DateTimeField(blank=True, null=True)),
                ('nome_cliente', models.CharField(max_length=255)),
                ('email_contato', models.EmailField(db_index=True, max_length=254)),
                ('telefone_contato', models.CharField(max_length=20)),
                ('cpf_cliente', models.CharField(max_length=14)),
                ('cep_entrega', models.CharField(blank=True, max_length=9)),
                ('rua_entrega', models.CharField(max_length=255)),
                ('numero_entrega', models.CharField(max_length=10)),
                ('complemento_entrega', models.CharField(blank=True, max_length=100, null=True)),
                ('bairro_entrega', models.CharField(blank=True, max_length=100)),
                ('cidade_entrega', models.CharField(blank=True, max_length=100)),
                ('estado_entrega', models.CharField(blank=True, max_length=2)),
            ],
            options={
                'verbose_name': 'Pedido',
                'verbose_name_plural': 'Pedidos',
                'db_table': 'vendas_pedido',
                'ordering': ['-data_pedido', '-id'],
            },
        ),
        migrations.CreateModel(
            name='ItemPedido',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nome_produto', models.CharField(max_length=255)),
                ('preco_unitario', models.DecimalField(decimal_places=2, max_digits=10)),
                ('quantidade', models.PositiveIntegerField()),
                ('subtotal', models.DecimalField(decimal_places=2, max_digits=10)),
                ('pedido', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='itens', to='vendas.pedido')),
                ('produto', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='itens_venda', to='catalog.produto')),
            ],
            options={
                'verbose_name': 'Item do Pedido',
                'verbose_name_plural': 'Itens do Pedido',
                'db_table': 'vendas_item_pedido',
            },
        ),
        migrations.CreateModel(
            name='Promocao',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('codigo', models.CharField(max_length=50, unique=True)),
                ('descricao', models.TextField(blank=True, null=True)),
                ('desconto_percentual', models.PositiveIntegerField(validators=[django.core.validators.MaxValueValidator(100)])),
                ('ativo', models.BooleanField(default=True)),
                ('data_criacao', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Promoção',
                'verbose_name_plural': 'Promoções',
                'db_table': 'vendas_promocao',
                'ordering': ['-data_criacao', '-id'],
            },
        ),
        migrations.CreateModel(
            name='Cupom',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('codigo', models.CharField(max_length=50, unique=True)),
                ('desconto_percentual', models.PositiveIntegerField(validators=[django.core.validators.MaxValueValidator(100)])),
                ('max_usos', models.PositiveIntegerField(blank=True, help_text='Vazio = ilimitado', null=True)),
                ('usos', models.PositiveIntegerField(default=0)),
                ('ativo', models.BooleanField(default=True)),
                ('data_criacao', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Cupom',
                'verbose_name_plural': 'Cupons',
                'db_table': 'vendas_cupom',
                'ordering': ['-data_criacao', '-id'],
            },
        ),
    ]
