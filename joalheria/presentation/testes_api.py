# joalheria/presentation/testes_api.py

from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

from django.test import override_settings
from django.utils import timezone
from rest_framework.test import APITestCase

from joalheria.catalog.models import Produto
from joalheria.core.entities import Endereco, StatusPedido, TransacaoPagamento
from joalheria.infrastructure.models import Usuario
from joalheria.vendas.models import Cupom, Pedido

CLIENTE = {'name': 'Maria Souza', 'email': 'maria@example.com', 'phone': '11987654321', 'cpf': '12345678901'}
ENDERECO = {'cep': '01001-000', 'street': 'Praça da Sé', 'number': '100', 'city': 'São Paulo', 'state': 'SP'}

NEGADO = (401, 403)


class APITestBase(APITestCase):

    def setUp(self):
        self.anel = Produto.objects.create(nome='Anel Ouro', preco=Decimal('100.00'), tipo='Ring', metal='Gold')
        self.colar = Produto.objects.create(nome='Colar Prata', preco=Decimal('50.00'), tipo='Necklace', metal='Silver')
        self.relogio = Produto.objects.create(nome='Relógio', preco=Decimal('900.00'), tipo='Watch', metal='Steel')

    def _admin(self):
        admin = Usuario.objects.create_superuser('admin@example.com', 'segredo123')
        self.client.force_authenticate(admin)
        return admin


# ====================================================================
# CATÁLOGO
# ====================================================================

class TestProdutosAPI(APITestBase):

    def test_filtro_por_tipo_e_metal(self):
        response = self.client.get('/api/products', {'type': 'Ring', 'metal': 'Gold'})

        self.assertEqual(response.status_code, 200)
        self.assertEqual([p['id'] for p in response.data], [self.anel.id])
        self.assertEqual(response.data[0]['name'], 'Anel Ouro')

    def test_ordenacao_por_preco(self):
        response = self.client.get('/api/products', {'sort': 'price_asc'})
        self.assertEqual([p['id'] for p in response.data], [self.colar.id, self.anel.id, self.relogio.id])

    def test_paginacao(self):
        response = self.client.get('/api/products', {'page': 2, 'pageSize': 2})

        self.assertEqual(response.data['page'], 2)
        self.assertEqual(response.data['totalPages'], 2)
        self.assertEqual(response.data['total'], 3)
        self.assertEqual(len(response.data['items']), 1)

    def test_pagina_fora_do_intervalo_e_ajustada(self):
        """
        Cenário: Página além da última mostra a última; página 0 mostra a primeira.
        """
        response = self.client.get('/api/products', {'page': 9, 'pageSize': 2})
        self.assertEqual(response.data['page'], 2)
        self.assertEqual([p['id'] for p in response.data['items']], [self.anel.id])

        response = self.client.get('/api/products', {'page': 0, 'pageSize': 2})
        self.assertEqual(response.data['page'], 1)
        self.assertEqual([p['id'] for p in response.data['items']], [self.relogio.id, self.colar.id])

    def test_paginacao_com_parametro_invalido(self):
        response = self.client.get('/api/products', {'page': 'dois'})
        self.assertEqual(response.status_code, 400)
        self.assertIn('message', response.data)

    def test_filtro_por_pedra(self):
        brinco = Produto.objects.create(nome='Brinco Pérola', preco=Decimal('75.00'), tipo='Earring', pedra='Pearl')

        response = self.client.get('/api/products', {'stone': 'Pearl'})

        self.assertEqual([p['id'] for p in response.data], [brinco.id])

    def test_ordenacao_por_preco_decrescente(self):
        response = self.client.get('/api/products', {'sort': 'price_desc'})
        self.assertEqual([p['id'] for p in response.data], [self.relogio.id, self.anel.id, self.colar.id])

    def test_ordenacao_padrao_e_desconhecida_mostram_os_mais_recentes(self):
        recentes = [self.relogio.id, self.colar.id, self.anel.id]

        for params in ({}, {'sort': 'newest'}, {'sort': 'alfabetica'}):
            response = self.client.get('/api/products', params)
            self.assertEqual([p['id'] for p in response.data], recentes, params)

    def test_produto_inexistente(self):
        response = self.client.get('/api/products/99999')
        self.assertEqual(response.status_code, 404)
        self.assertIn('message', response.data)

    def test_escrita_exige_administrador(self):
        """
        Cenário: Visitante não cria produto; administrador cria.
        """
        novo = {'name': 'Brinco Pérola', 'price': '75.00', 'type': 'Earring', 'stone': 'Pearl'}

        self.assertIn(self.client.post('/api/products', novo, format='json').status_code, NEGADO)

        self._admin()
        response = self.client.post('/api/products', novo, format='json')

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['stone'], 'Pearl')
        self.assertTrue(Produto.objects.filter(nome='Brinco Pérola').exists())


# ====================================================================
# CARRINHO
# ====================================================================

class TestCarrinhoAPI(APITestBase):

    def test_fluxo_do_carrinho(self):
        """
        Cenário: Anel x2 (selecionado) e colar x1 (desmarcado):
        total 250.00 e total selecionado 200.00.
        """
        # ARRANGE
        self.client.post('/api/cart', {'productId': self.anel.id, 'quantity': 2}, format='json')
        self.client.post('/api/cart', {'productId': self.colar.id}, format='json')

        # ACT
        response = self.client.post(f'/api/cart/{self.colar.id}/toggle')

        # ASSERT
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['total'], '250.00')
        self.assertEqual(response.data['selectedTotal'], '200.00')
        self.assertEqual(response.data['count'], 2)
        self.assertEqual(response.data['units'], 3)

        response = self.client.post('/api/cart/select-all')
        self.assertEqual(response.data['selectedTotal'], '250.00')

    def test_quantidade_minima_e_remocao(self):
        self.client.post('/api/cart', {'productId': self.anel.id, 'quantity': 3}, format='json')

        response = self.client.patch(f'/api/cart/{self.anel.id}', {'quantity': 0}, format='json')
        self.assertEqual(response.data['items'][0]['quantity'], 1)

        response = self.client.delete(f'/api/cart/{self.anel.id}')
        self.assertEqual(response.data['items'], [])

    def test_produto_inexistente(self):
        response = self.client.post('/api/cart', {'productId': 99999}, format='json')
        self.assertEqual(response.status_code, 404)


# ====================================================================
# CHECKOUT E PAGAMENTO
# ====================================================================

@override_settings(USAR_PAGAMENTO_MOCK=True)
class TestCheckoutAPI(APITestBase):

    def setUp(self):
        super().setUp()
        self.client.post('/api/cart', {'productId': self.anel.id, 'quantity': 2}, format='json')
        self.client.post('/api/cart', {'productId': self.colar.id}, format='json')
        self.client.post(f'/api/cart/{self.colar.id}/toggle')

    def test_guarda_mantem_a_etapa(self):
        response = self.client.post('/api/checkout/next', {'customer': {'name': 'Maria'}}, format='json')

        self.assertEqual(response.status_code, 400)
        self.assertIn('cpf', response.data['fields'])
        self.assertEqual(self.client.get('/api/checkout').data['step'], 1)

    def test_checkout_completo(self):
        """
        Cenário: Cliente -> Endereço -> Cartão -> Revisão -> Pagamento aprovado.
        Só o item selecionado é cobrado e removido do carrinho.
        """
        # ARRANGE
        self.client.post('/api/checkout/next', {'customer': CLIENTE}, format='json')
        self.client.post('/api/checkout/next', {'address': ENDERECO}, format='json')
        response = self.client.post('/api/checkout/next', {'paymentMethod': 'credit_card'}, format='json')
        self.assertEqual(response.data['step'], 4)
        self.assertEqual(response.data['customer']['cpf'], '123.456.789-01')

        # ACT
        response = self.client.post('/api/checkout/pay', {'payment': {'token': 'ok'}}, format='json')

        # ASSERT
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['step'], 5)
        pedido = Pedido.objects.get(pk=response.data['result']['pedido_id'])
        self.assertEqual(pedido.status, 'approved')
        self.assertEqual(pedido.total, Decimal('200.00'))

        carrinho = self.client.get('/api/cart').data
        self.assertEqual([item['productId'] for item in carrinho['items']], [self.colar.id])

    def test_cartao_recusado_permanece_na_revisao(self):
        self.client.post('/api/checkout/next', {'customer': CLIENTE}, format='json')
        self.client.post('/api/checkout/next', {'address': ENDERECO}, format='json')
        self.client.post('/api/checkout/next', {'paymentMethod': 'credit_card'}, format='json')

        response = self.client.post('/api/checkout/pay', {'payment': {'token': 'recusar'}}, format='json')

        self.assertEqual(response.data['step'], 4)
        self.assertTrue(response.data['error'])
        self.assertEqual(self.client.get('/api/cart').data['count'], 2)

    def test_voltar(self):
        self.client.post('/api/checkout/next', {'customer': CLIENTE}, format='json')
        response = self.client.post('/api/checkout/back')
        self.assertEqual(response.data['step'], 1)


@override_settings(USAR_PAGAMENTO_MOCK=True)
class TestPagamentoAPI(APITestBase):

    def _corpo(self, metodo='pix', **extra):
        corpo = {
            'amount': '1.00',
            'email': CLIENTE['email'],
            'name': CLIENTE['name'],
            'paymentMethod': metodo,
            'customerData': {'cpf': CLIENTE['cpf'], 'phone': CLIENTE['phone'], 'address': ENDERECO},
            'items': [{'id': self.anel.id, 'quantity': 2}],
        }
        corpo.update(extra)
        return corpo

    def test_pix_cria_pedido_pendente_com_total_do_catalogo(self):
        response = self.client.post('/api/payment/create', self._corpo(), format='json')

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['paymentStatus'], 'pending')
        self.assertTrue(response.data['qrCode'].startswith('00020126MOCKPIX'))
        self.assertEqual(Pedido.objects.get(pk=response.data['orderId']).total, Decimal('200.00'))

    def test_cupom_aplicado_e_resgatado(self):
        Cupom.objects.create(codigo='PROMO10', desconto_percentual=10, max_usos=5)

        response = self.client.post(
            '/api/payment/create', self._corpo('credit_card', token='ok', couponCode='promo10'), format='json'
        )

        self.assertEqual(response.data['paymentStatus'], 'approved')
        self.assertEqual(Pedido.objects.get(pk=response.data['orderId']).total, Decimal('180.00'))
        self.assertEqual(Cupom.objects.get(codigo='PROMO10').usos, 1)

    def test_cupom_de_uso_unico_nao_vale_duas_vezes(self):
        """
        Cenário: Cupom com max_usos=1 é aceito no primeiro pedido e recusado no segundo.
        """
        Cupom.objects.create(codigo='UNICO', desconto_percentual=10, max_usos=1)
        corpo = self._corpo('credit_card', token='ok', couponCode='UNICO')

        primeiro = self.client.post('/api/payment/create', corpo, format='json')
        segundo = self.client.post('/api/payment/create', corpo, format='json')

        self.assertEqual(primeiro.status_code, 201)
        self.assertEqual(segundo.status_code, 400)
        self.assertEqual(Cupom.objects.get(codigo='UNICO').usos, 1)
        self.assertEqual(Pedido.objects.count(), 1)

    def test_cupom_devolvido_quando_o_cartao_e_recusado(self):
        Cupom.objects.create(codigo='UNICO', desconto_percentual=10, max_usos=1)

        response = self.client.post(
            '/api/payment/create', self._corpo('credit_card', token='recusar', couponCode='UNICO'), format='json'
        )

        self.assertEqual(response.data['paymentStatus'], 'rejected')
        self.assertEqual(Cupom.objects.get(codigo='UNICO').usos, 0)

    @patch('joalheria.infrastructure.gateways.PagamentoGatewayMock.verificar_status')
    def test_pix_expirado_devolve_o_cupom(self, verificar_status):
        """
        Cenário: Pix com cupom fica pendente; o webhook informa a rejeição e o uso volta ao cupom.
        """
        # ARRANGE
        Cupom.objects.create(codigo='UNICO', desconto_percentual=10, max_usos=1)
        response = self.client.post('/api/payment/create', self._corpo(couponCode='UNICO'), format='json')
        pagamento_id = response.data['paymentId']
        self.assertEqual(Cupom.objects.get(codigo='UNICO').usos, 1)
        verificar_status.return_value = TransacaoPagamento(status=StatusPedido.REJEITADO, referencia_externa=pagamento_id)

        # ACT
        notificacao = self.client.post(
            '/api/webhook/mercadopago', {'type': 'payment', 'data': {'id': pagamento_id}}, format='json'
        )

        # ASSERT
        self.assertEqual(notificacao.status_code, 200)
        self.assertEqual(Pedido.objects.get(pk=response.data['orderId']).status, 'rejected')
        self.assertEqual(Cupom.objects.get(codigo='UNICO').usos, 0)

    def test_dados_do_comprador_normalizados_e_limitados(self):
        """
        Cenário: CPF e telefone sem máscara são gravados formatados; número longo demais é recusado.
        """
        response = self.client.post('/api/payment/create', self._corpo(), format='json')

        pedido = Pedido.objects.get(pk=response.data['orderId'])
        self.assertEqual(pedido.cpf_cliente, '123.456.789-01')
        self.assertEqual(pedido.telefone_contato, '(11) 98765-4321')

        corpo = self._corpo()
        corpo['customerData'] = {**corpo['customerData'], 'address': {**ENDERECO, 'number': '1' * 11}}
        response = self.client.post('/api/payment/create', corpo, format='json')

        self.assertEqual(response.status_code, 400)
        self.assertIn('number', response.data['customerData']['address'])

    def test_validar_cupom(self):
        Cupom.objects.create(codigo='PROMO10', desconto_percentual=10)

        response = self.client.post('/api/coupons/validate', {'code': 'PROMO10'}, format='json')
        self.assertEqual(response.data, {'code': 'PROMO10', 'discountPercent': 10})

        response = self.client.post('/api/coupons/validate', {'code': 'NAOEXISTE'}, format='json')
        self.assertEqual(response.status_code, 404)

    def test_webhook_sem_pagamento(self):
        response = self.client.post('/api/webhook/mercadopago', {'type': 'merchant_order'}, format='json')
        self.assertEqual(response.status_code, 400)


# ====================================================================
# PEDIDOS E RASTREAMENTO
# ====================================================================

@override_settings(USAR_PAGAMENTO_MOCK=True)
class TestRastreioAPI(APITestBase):

    def setUp(self):
        super().setUp()
        response = self.client.post('/api/payment/create', {
            'email': CLIENTE['email'],
            'name': CLIENTE['name'],
            'paymentMethod': 'credit_card',
            'token': 'ok',
            'customerData': {'cpf': CLIENTE['cpf'], 'phone': CLIENTE['phone'], 'address': ENDERECO},
            'items': [{'id': self.relogio.id, 'quantity': 1}],
        }, format='json')
        self.pedido_id = response.data['orderId']

    def test_pedido_sem_envio_esta_pendente(self):
        response = self.client.get(f'/api/orders/{self.pedido_id}')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['status'], 'approved')
        self.assertEqual(response.data['trackingStatus'], 'pending')
        self.assertEqual(response.data['timeline'], [])
        self.assertIsNotNone(response.data['estimatedShipDate'])

    def test_status_derivado_pelo_codigo_de_rastreio(self):
        """
        Cenário: Enviado há 4 dias, o pedido aparece como em trânsito,
        com as duas primeiras etapas na linha do tempo.
        """
        Pedido.objects.filter(pk=self.pedido_id).update(
            codigo_rastreio='BR12345678', enviado_em=timezone.now() - timedelta(days=4, hours=1)
        )

        response = self.client.get('/api/orders/br12345678')

        self.assertEqual(response.data['id'], self.pedido_id)
        self.assertEqual(response.data['trackingStatus'], 'em_transito')
        self.assertEqual(len(response.data['timeline']), 2)

    def test_pedido_inexistente(self):
        self.assertEqual(self.client.get('/api/orders/XX000').status_code, 404)

    def test_status_manual_pelo_administrador(self):
        url = f'/api/admin/orders/{self.pedido_id}/status'
        self.assertIn(self.client.patch(url, {'status': 'refunded'}, format='json').status_code, NEGADO)

        self._admin()
        response = self.client.patch(url, {'status': 'refunded'}, format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['status'], 'refunded')


# ====================================================================
# ÁREA DO CLIENTE E UTILITÁRIOS
# ====================================================================

class TestAreaDoClienteAPI(APITestBase):

    def setUp(self):
        super().setUp()
        self.usuario = Usuario.objects.create_user('ana@example.com', nome='Ana')

    def test_favoritos_exigem_login(self):
        self.assertIn(self.client.get('/api/user/favorites').status_code, NEGADO)

    def test_favoritos(self):
        self.client.force_authenticate(self.usuario)

        response = self.client.post('/api/user/favorites', {'productId': self.anel.id}, format='json')
        self.assertEqual(response.data['productIds'], [self.anel.id])

        response = self.client.delete(f'/api/user/favorites/{self.anel.id}')
        self.assertEqual(response.data['productIds'], [])

    def test_favorito_individual_aceita_apenas_delete(self):
        self.client.force_authenticate(self.usuario)

        response = self.client.get(f'/api/user/favorites/{self.anel.id}')

        self.assertEqual(response.status_code, 405)

    def test_novo_endereco_vira_padrao(self):
        self.client.force_authenticate(self.usuario)

        self.client.post('/api/user/addresses', ENDERECO, format='json')
        self.client.post('/api/user/addresses', {**ENDERECO, 'number': '200'}, format='json')
        enderecos = self.client.get('/api/user/addresses').data

        padroes = [e['number'] for e in enderecos if e['isDefault']]
        self.assertEqual(padroes, ['200'])

    def test_me(self):
        self.client.force_authenticate(self.usuario)

        response = self.client.get('/api/auth/me')

        self.assertEqual(response.data['email'], 'ana@example.com')
        self.assertIn('access', response.data['tokens'])


class TestCepAPI(APITestCase):

    def test_cep_com_formato_invalido(self):
        self.assertEqual(self.client.get('/api/cep/123').status_code, 400)

    @patch('joalheria.infrastructure.gateways.ViaCepGateway.consultar')
    def test_cep_encontrado(self, consultar):
        consultar.return_value = Endereco(
            cep='01001-000', rua='Praça da Sé', bairro='Sé', cidade='São Paulo', estado='SP'
        )

        response = self.client.get('/api/cep/01001-000')

        self.assertEqual(response.data, {'rua': 'Praça da Sé', 'bairro': 'Sé', 'cidade': 'São Paulo', 'estado': 'SP'})
        consultar.assert_called_once_with('01001000')

    @patch('joalheria.infrastructure.gateways.ViaCepGateway.consultar', return_value=None)
    def test_cep_nao_encontrado(self, _consultar):
        self.assertEqual(self.client.get('/api/cep/99999999').status_code, 404)
