# joalheria/infrastructure/testes_gateways.py

from decimal import Decimal
from unittest.mock import Mock, patch

import requests
from django.test import SimpleTestCase

from joalheria.core.carrinho import CarrinhoStore
from joalheria.core.entities import Pedido, DadosCliente, Endereco, Produto, StatusPedido
from joalheria.core.espera import EsperaLimitada
from joalheria.core.exceptions import (
    PagamentoFalhouError, GatewayIndisponivelError, ServicoIndisponivelError, AutenticacaoFalhouError,
)
from joalheria.infrastructure.gateways import (
    MercadoPagoGateway, PagamentoGatewayMock, ViaCepGateway, GoogleOAuthGateway, ArmazenamentoCarrinhoSessao,
)


def _resposta(status_code=200, json=None):
    response = Mock(status_code=status_code)
    response.json.return_value = json or {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code}")
    return response


def _pedido(metodo='credit_card'):
    return Pedido(
        cliente=DadosCliente('Maria Souza', 'maria@example.com', '(11) 98765-4321', '123.456.789-01'),
        endereco_entrega=Endereco(rua='Praça da Sé', numero='100', cep='01001-000', bairro='Sé',
                                  cidade='São Paulo', estado='SP'),
        itens=[],
        total=Decimal('199.90'),
        metodo_pagamento=metodo,
        id=7,
    )


class TestMercadoPagoGateway(SimpleTestCase):

    def setUp(self):
        # Espera sem sono real: o relógio avança 1s a cada leitura
        self.tempos = iter(range(1000))
        self.gateway = MercadoPagoGateway(
            access_token='TEST-TOKEN',
            api_url='https://mp.test/v1/',
            timeout=3,
            espera_segundos=2,
            espera=EsperaLimitada(timeout=2, intervalo=1, relogio=lambda: next(self.tempos), dormir=lambda s: None),
        )

    @patch('joalheria.infrastructure.gateways.requests')
    def test_pix_retorna_qr_code(self, requests_mock):
        """
        Cenário: Pagamento Pix fica pendente e traz o QR Code do point_of_interaction.
        """
        # ARRANGE
        requests_mock.exceptions = requests.exceptions
        requests_mock.get.return_value = _resposta(200)
        requests_mock.post.return_value = _resposta(201, {
            'id': 123, 'status': 'pending',
            'point_of_interaction': {'transaction_data': {'qr_code': '000201PIX', 'qr_code_base64': 'aGVsbG8='}},
        })

        # ACT
        transacao = self.gateway.processar_pagamento(_pedido('pix'), {})

        # ASSERT
        self.assertEqual(transacao.status, StatusPedido.PENDENTE)
        self.assertEqual(transacao.referencia_externa, '123')
        self.assertEqual(transacao.qr_code, '000201PIX')

        url = requests_mock.post.call_args.args[0]
        kwargs = requests_mock.post.call_args.kwargs
        self.assertEqual(url, 'https://mp.test/v1/payments')
        self.assertEqual(kwargs['json']['payment_method_id'], 'pix')
        self.assertEqual(kwargs['json']['payer']['identification']['number'], '12345678901')
        self.assertIn('X-Idempotency-Key', kwargs['headers'])
        self.assertEqual(kwargs['timeout'], 3)

    @patch('joalheria.infrastructure.gateways.requests')
    def test_boleto_envia_endereco(self, requests_mock):
        requests_mock.exceptions = requests.exceptions
        requests_mock.get.return_value = _resposta(200)
        requests_mock.post.return_value = _resposta(201, {
            'id': 9, 'status': 'pending',
            'transaction_details': {'external_resource_url': 'https://boleto/9'},
        })

        transacao = self.gateway.processar_pagamento(_pedido('boleto'), {})

        payload = requests_mock.post.call_args.kwargs['json']
        self.assertEqual(payload['payment_method_id'], 'bolbradesco')
        self.assertEqual(payload['payer']['address']['zip_code'], '01001000')
        self.assertEqual(transacao.boleto_url, 'https://boleto/9')

    @patch('joalheria.infrastructure.gateways.requests')
    def test_cartao_sem_token_falha_antes_de_chamar_a_api(self, requests_mock):
        requests_mock.exceptions = requests.exceptions
        with self.assertRaises(PagamentoFalhouError):
            self.gateway.processar_pagamento(_pedido('credit_card'), {})
        requests_mock.post.assert_not_called()

    @patch('joalheria.infrastructure.gateways.requests')
    def test_cartao_recusado(self, requests_mock):
        requests_mock.exceptions = requests.exceptions
        requests_mock.get.return_value = _resposta(200)
        requests_mock.post.return_value = _resposta(201, {
            'id': 5, 'status': 'rejected', 'status_detail': 'cc_rejected_bad_filled_security_code',
        })

        transacao = self.gateway.processar_pagamento(_pedido(), {'token': 'tok', 'installments': 3})

        self.assertEqual(transacao.status, StatusPedido.REJEITADO)
        self.assertEqual(transacao.detalhe, 'cc_rejected_bad_filled_security_code')
        self.assertEqual(requests_mock.post.call_args.kwargs['json']['installments'], 3)

    @patch('joalheria.infrastructure.gateways.requests')
    def test_gateway_indisponivel_apos_espera(self, requests_mock):
        """
        Cenário: A API responde 503 durante toda a espera; nenhum pagamento é enviado.
        """
        requests_mock.exceptions = requests.exceptions
        requests_mock.get.return_value = _resposta(503)

        with self.assertRaises(GatewayIndisponivelError):
            self.gateway.processar_pagamento(_pedido('pix'), {})
        requests_mock.post.assert_not_called()

    @patch('joalheria.infrastructure.gateways.requests')
    def test_erro_de_conexao_no_pagamento(self, requests_mock):
        requests_mock.exceptions = requests.exceptions
        requests_mock.get.return_value = _resposta(200)
        requests_mock.post.side_effect = requests.exceptions.ConnectionError("reset")

        with self.assertRaises(PagamentoFalhouError):
            self.gateway.processar_pagamento(_pedido('pix'), {})

    @patch('joalheria.infrastructure.gateways.requests')
    def test_verificar_status(self, requests_mock):
        requests_mock.exceptions = requests.exceptions
        requests_mock.get.return_value = _resposta(200, {'id': 123, 'status': 'approved'})

        transacao = self.gateway.verificar_status('123')

        self.assertEqual(transacao.status, StatusPedido.APROVADO)
        self.assertEqual(requests_mock.get.call_args.args[0], 'https://mp.test/v1/payments/123')


class TestPagamentoGatewayMock(SimpleTestCase):

    def test_comportamento_por_metodo(self):
        gateway = PagamentoGatewayMock()

        self.assertEqual(gateway.processar_pagamento(_pedido('pix'), {}).status, StatusPedido.PENDENTE)
        self.assertTrue(gateway.processar_pagamento(_pedido('boleto'), {}).boleto_url)
        self.assertEqual(gateway.processar_pagamento(_pedido(), {'token': 'ok'}).status, StatusPedido.APROVADO)
        self.assertEqual(gateway.processar_pagamento(_pedido(), {'token': 'recusar'}).status, StatusPedido.REJEITADO)


class TestViaCepGateway(SimpleTestCase):

    def setUp(self):
        self.gateway = ViaCepGateway(base_url='https://viacep.test/ws')

    @patch('joalheria.infrastructure.gateways.requests')
    def test_cep_encontrado(self, requests_mock):
        requests_mock.exceptions = requests.exceptions
        requests_mock.get.return_value = _resposta(200, {
            'cep': '01001-000', 'logradouro': 'Praça da Sé', 'bairro': 'Sé', 'localidade': 'São Paulo', 'uf': 'SP',
        })

        endereco = self.gateway.consultar('01001000')

        self.assertEqual(endereco.rua, 'Praça da Sé')
        self.assertEqual(endereco.estado, 'SP')
        self.assertEqual(requests_mock.get.call_args.args[0], 'https://viacep.test/ws/01001000/json/')

    @patch('joalheria.infrastructure.gateways.requests')
    def test_cep_inexistente(self, requests_mock):
        requests_mock.exceptions = requests.exceptions
        requests_mock.get.return_value = _resposta(200, {'erro': True})
        self.assertIsNone(self.gateway.consultar('99999999'))

    @patch('joalheria.infrastructure.gateways.requests')
    def test_servico_fora_do_ar(self, requests_mock):
        requests_mock.exceptions = requests.exceptions
        requests_mock.get.side_effect = requests.exceptions.Timeout()
        with self.assertRaises(ServicoIndisponivelError):
            self.gateway.consultar('01001000')


class TestGoogleOAuthGateway(SimpleTestCase):

    def setUp(self):
        self.gateway = GoogleOAuthGateway(
            client_id='cid', client_secret='segredo', redirect_uri='https://loja.test/auth/google/callback'
        )

    def test_url_de_autorizacao(self):
        url = self.gateway.url_autorizacao('abc')
        self.assertTrue(url.startswith(GoogleOAuthGateway.AUTH_URL))
        self.assertIn('state=abc', url)
        self.assertIn('client_id=cid', url)

    @patch('joalheria.infrastructure.gateways.requests')
    def test_obter_perfil(self, requests_mock):
        requests_mock.exceptions = requests.exceptions
        requests_mock.post.return_value = _resposta(200, {'access_token': 'at'})
        requests_mock.get.return_value = _resposta(200, {'id': 'g-1', 'email': 'ana@example.com'})

        perfil = self.gateway.obter_perfil('codigo')

        self.assertEqual(perfil['id'], 'g-1')
        self.assertEqual(requests_mock.get.call_args.kwargs['headers'], {'Authorization': 'Bearer at'})

    @patch('joalheria.infrastructure.gateways.requests')
    def test_codigo_recusado(self, requests_mock):
        requests_mock.exceptions = requests.exceptions
        requests_mock.post.return_value = _resposta(400)
        with self.assertRaises(AutenticacaoFalhouError):
            self.gateway.obter_perfil('codigo-expirado')


class SessaoFalsa(dict):
    """Dicionário com o atributo `modified` das sessões Django."""
    modified = False


class TestArmazenamentoCarrinhoSessao(SimpleTestCase):

    def test_salvar_marca_a_sessao_como_modificada(self):
        sessao = SessaoFalsa()
        armazenamento = ArmazenamentoCarrinhoSessao(sessao)

        armazenamento.salvar([{'produto_id': 1, 'quantidade': 2}])

        self.assertEqual(sessao['carrinho'], [{'produto_id': 1, 'quantidade': 2}])
        self.assertTrue(sessao.modified)

    def test_carrinho_sobrevive_entre_instancias(self):
        """
        Cenário: Um CarrinhoStore novo sobre a mesma sessão vê os itens gravados.
        """
        sessao = SessaoFalsa()
        CarrinhoStore(ArmazenamentoCarrinhoSessao(sessao)).adicionar_item(
            Produto(id=5, nome='Anel', preco=Decimal('120.00')), 2
        )

        recarregado = CarrinhoStore(ArmazenamentoCarrinhoSessao(sessao))

        self.assertEqual([(i.produto_id, i.quantidade) for i in recarregado.itens], [(5, 2)])
        self.assertEqual(recarregado.total(), Decimal('240.00'))

    def test_sessao_vazia(self):
        self.assertEqual(ArmazenamentoCarrinhoSessao(SessaoFalsa()).carregar(), [])
