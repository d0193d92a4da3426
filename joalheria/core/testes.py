# joalheria/core/testes.py

import unittest
from unittest.mock import Mock
from decimal import Decimal
from datetime import datetime, timedelta, timezone

# Importamos as classes que queremos testar
from joalheria.core.use_cases import (
    CriarPagamentoUseCase,
    AtualizarStatusPorNotificacaoUseCase,
    GerenciarPedidosAdminUseCase,
    GerenciarProdutosAdminUseCase,
    ValidarCupomUseCase,
    ConsultarRastreioUseCase,
    AtribuirCodigosRastreioUseCase,
    AcompanharRastreioUseCase,
    LoginGoogleUseCase,
    GerenciarEnderecosUseCase,
    ConsultarCepUseCase,
    EnviarImagemUseCase,
    DetalharProdutoUseCase,
)
from joalheria.core.entities import (
    Produto, ItemCarrinho, Pedido, ItemPedido, DadosCliente, Endereco, Cupom, Usuario,
    TransacaoPagamento, StatusPedido, StatusRastreio,
)
from joalheria.core.espera import EsperaLimitada
from joalheria.core.exceptions import (
    CarrinhoVazioError,
    CupomInvalidoError,
    DadosInvalidosError,
    PagamentoFalhouError,
    PedidoNaoEncontradoError,
    ProdutoNaoEncontradoError,
    StatusInvalidoError,
    AutenticacaoFalhouError,
    ItemNaoEncontradoError,
    TempoEsgotadoError,
)

AGORA = datetime(2024, 5, 20, 10, 0, tzinfo=timezone.utc)


def _pedido(**kwargs):
    dados = dict(
        cliente=DadosCliente('Maria', 'maria@example.com', '(11) 98765-4321', '123.456.789-01'),
        endereco_entrega=Endereco(rua='Rua A', numero='1', cep='01001000'),
        itens=[ItemPedido(produto_id=1, nome='Anel', preco=Decimal('100.00'), quantidade=2)],
        total=Decimal('200.00'),
        metodo_pagamento='credit_card',
        id=10,
    )
    dados.update(kwargs)
    return Pedido(**dados)


# ====================================================================
# TESTES DE PAGAMENTO E PEDIDO
# ====================================================================
class TestCriarPagamento(unittest.TestCase):

    def setUp(self):
        """
        Prepara o ambiente com objetos "Mock" para simular
        as dependências externas (banco de dados e gateway).
        """
        self.pedido_repo_mock = Mock()
        self.produto_repo_mock = Mock()
        self.cupom_repo_mock = Mock()
        self.pagamento_gateway_mock = Mock()

        self.use_case = CriarPagamentoUseCase(
            pedido_repo=self.pedido_repo_mock,
            produto_repo=self.produto_repo_mock,
            cupom_repo=self.cupom_repo_mock,
            pagamento_gateway=self.pagamento_gateway_mock,
        )

        # O catálogo tem o anel por 120,00 (o carrinho guardou 100,00)
        self.produto_repo_mock.buscar_por_id.return_value = Produto(id=1, nome='Anel', preco=Decimal('120.00'))
        self.pedido_repo_mock.criar.side_effect = lambda pedido: _pedido(
            itens=pedido.itens, total=pedido.total, codigo_cupom=pedido.codigo_cupom, metodo_pagamento=pedido.metodo_pagamento,
        )
        self.pedido_repo_mock.atualizar_status.side_effect = lambda pid, status, pagamento_id=None: _pedido(
            status=status, pagamento_id=pagamento_id,
        )

        self.cliente = DadosCliente('Maria', 'maria@example.com', '(11) 98765-4321', '123.456.789-01')
        self.endereco = Endereco(rua='Rua A', numero='1', cep='01001-000')
        self.itens = [ItemCarrinho(produto_id=1, nome='Anel', preco=Decimal('100.00'), quantidade=2)]

    def _executar(self, **kwargs):
        dados = dict(
            cliente=self.cliente, endereco=self.endereco, metodo_pagamento='credit_card',
            itens=self.itens, dados_pagamento={'token': 'tok'},
        )
        dados.update(kwargs)
        return self.use_case.executar(**dados)

    def test_pagamento_aprovado_usa_preco_do_catalogo(self):
        """
        Cenário: O total do pedido é calculado com o preço atual do catálogo.
        """
        # ARRANGE
        self.pagamento_gateway_mock.processar_pagamento.return_value = TransacaoPagamento(
            status=StatusPedido.APROVADO, referencia_externa='PAY-1'
        )

        # ACT
        pedido, transacao = self._executar()

        # ASSERT
        pedido_criado = self.pedido_repo_mock.criar.call_args.args[0]
        self.assertEqual(pedido_criado.total, Decimal('240.00'))
        self.assertEqual(pedido_criado.status, StatusPedido.PENDENTE)
        self.assertEqual(pedido.status, StatusPedido.APROVADO)
        self.pedido_repo_mock.atualizar_status.assert_called_once_with(10, StatusPedido.APROVADO, pagamento_id='PAY-1')
        self.cupom_repo_mock.registrar_uso.assert_not_called()

    def test_cupom_aplicado_e_resgatado(self):
        # ARRANGE
        self.cupom_repo_mock.buscar_por_codigo.return_value = Cupom(codigo='PROMO10', desconto_percentual=10)
        self.pagamento_gateway_mock.processar_pagamento.return_value = TransacaoPagamento(
            status=StatusPedido.PENDENTE, referencia_externa='PAY-2'
        )

        # ACT
        self._executar(codigo_cupom='promo10', metodo_pagamento='pix')

        # ASSERT
        pedido_criado = self.pedido_repo_mock.criar.call_args.args[0]
        self.assertEqual(pedido_criado.total, Decimal('216.00'))
        self.assertEqual(pedido_criado.codigo_cupom, 'PROMO10')
        self.cupom_repo_mock.registrar_uso.assert_called_once_with('PROMO10')
        self.cupom_repo_mock.liberar_uso.assert_not_called()

    def test_cupom_liberado_em_pagamento_recusado(self):
        """
        Cenário: O uso reservado antes da cobrança é devolvido quando o cartão é recusado.
        """
        self.cupom_repo_mock.buscar_por_codigo.return_value = Cupom(codigo='PROMO10', desconto_percentual=10)
        self.pagamento_gateway_mock.processar_pagamento.return_value = TransacaoPagamento(
            status=StatusPedido.REJEITADO, referencia_externa='PAY-3'
        )

        pedido, transacao = self._executar(codigo_cupom='PROMO10')

        self.assertFalse(transacao.aceito)
        self.cupom_repo_mock.registrar_uso.assert_called_once_with('PROMO10')
        self.cupom_repo_mock.liberar_uso.assert_called_once_with('PROMO10')

    def test_cupom_esgotado_na_reserva_nao_cobra(self):
        """
        Cenário: O cupom passa na validação, mas outro pedido leva o último uso antes da reserva.
        """
        # ARRANGE
        self.cupom_repo_mock.buscar_por_codigo.return_value = Cupom(
            codigo='ULTIMO', desconto_percentual=10, max_usos=1, usos=0
        )
        self.cupom_repo_mock.registrar_uso.side_effect = CupomInvalidoError("Cupom 'ULTIMO' inválido ou esgotado.")

        # ACT / ASSERT
        with self.assertRaises(CupomInvalidoError):
            self._executar(codigo_cupom='ULTIMO')

        self.pedido_repo_mock.criar.assert_not_called()
        self.pagamento_gateway_mock.processar_pagamento.assert_not_called()
        self.cupom_repo_mock.liberar_uso.assert_not_called()

    def test_falha_do_gateway_rejeita_o_pedido(self):
        """
        Cenário: Erro de comunicação com o gateway marca o pedido como rejeitado e propaga o erro.
        """
        self.cupom_repo_mock.buscar_por_codigo.return_value = Cupom(codigo='PROMO10', desconto_percentual=10)
        self.pagamento_gateway_mock.processar_pagamento.side_effect = PagamentoFalhouError("Sem conexão.")

        with self.assertRaises(PagamentoFalhouError):
            self._executar(codigo_cupom='PROMO10')

        self.pedido_repo_mock.atualizar_status.assert_called_once_with(10, StatusPedido.REJEITADO)
        self.cupom_repo_mock.liberar_uso.assert_called_once_with('PROMO10')

    def test_sem_itens(self):
        with self.assertRaises(CarrinhoVazioError):
            self._executar(itens=[])
        self.pedido_repo_mock.criar.assert_not_called()

    def test_dados_do_cliente_incompletos(self):
        with self.assertRaises(DadosInvalidosError) as ctx:
            self._executar(cliente=DadosCliente(nome='Maria', email='maria@example.com'))
        self.assertEqual(ctx.exception.campos, ['telefone', 'cpf'])

    def test_produto_removido_do_catalogo(self):
        self.produto_repo_mock.buscar_por_id.return_value = None
        with self.assertRaises(ProdutoNaoEncontradoError):
            self._executar()
        self.pagamento_gateway_mock.processar_pagamento.assert_not_called()


class TestValidarCupom(unittest.TestCase):

    def setUp(self):
        self.cupom_repo_mock = Mock()
        self.use_case = ValidarCupomUseCase(self.cupom_repo_mock)

    def test_cupom_esgotado(self):
        self.cupom_repo_mock.buscar_por_codigo.return_value = Cupom(
            codigo='X', desconto_percentual=5, max_usos=3, usos=3
        )
        with self.assertRaises(CupomInvalidoError):
            self.use_case.executar('x')

    def test_cupom_inativo_ou_inexistente(self):
        self.cupom_repo_mock.buscar_por_codigo.return_value = Cupom(codigo='X', desconto_percentual=5, ativo=False)
        with self.assertRaises(CupomInvalidoError):
            self.use_case.executar('X')

        self.cupom_repo_mock.buscar_por_codigo.return_value = None
        with self.assertRaises(CupomInvalidoError):
            self.use_case.executar('NADA')

    def test_cupom_ilimitado(self):
        self.cupom_repo_mock.buscar_por_codigo.return_value = Cupom(codigo='VIP', desconto_percentual=15, usos=999)
        self.assertEqual(self.use_case.executar(' vip ').codigo, 'VIP')
        self.cupom_repo_mock.buscar_por_codigo.assert_called_with('VIP')


class TestAtualizarStatusPorNotificacao(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.gateway_mock = Mock()
        self.cupom_repo_mock = Mock()
        self.use_case = AtualizarStatusPorNotificacaoUseCase(
            self.pedido_repo_mock, self.gateway_mock, self.cupom_repo_mock
        )

    def test_atualiza_quando_o_status_muda(self):
        self.gateway_mock.verificar_status.return_value = TransacaoPagamento(status=StatusPedido.APROVADO)
        self.pedido_repo_mock.buscar_por_pagamento_id.return_value = _pedido(status=StatusPedido.PENDENTE)

        self.use_case.executar('PAY-1')

        self.pedido_repo_mock.atualizar_status.assert_called_once_with(10, StatusPedido.APROVADO)

    def test_pix_pendente_rejeitado_devolve_o_cupom(self):
        """
        Cenário: Pix com cupom fica pendente e expira; a notificação de rejeição devolve o uso.
        """
        # ARRANGE
        self.gateway_mock.verificar_status.return_value = TransacaoPagamento(status=StatusPedido.REJEITADO)
        self.pedido_repo_mock.buscar_por_pagamento_id.return_value = _pedido(
            status=StatusPedido.PENDENTE, codigo_cupom='PROMO10'
        )

        # ACT
        self.use_case.executar('PAY-2')

        # ASSERT
        self.pedido_repo_mock.atualizar_status.assert_called_once_with(10, StatusPedido.REJEITADO)
        self.cupom_repo_mock.liberar_uso.assert_called_once_with('PROMO10')

    def test_estorno_de_aprovado_mantem_o_uso_do_cupom(self):
        self.gateway_mock.verificar_status.return_value = TransacaoPagamento(status=StatusPedido.ESTORNADO)
        self.pedido_repo_mock.buscar_por_pagamento_id.return_value = _pedido(
            status=StatusPedido.APROVADO, codigo_cupom='PROMO10'
        )

        self.use_case.executar('PAY-2')

        self.cupom_repo_mock.liberar_uso.assert_not_called()

    def test_nao_atualiza_status_igual(self):
        self.gateway_mock.verificar_status.return_value = TransacaoPagamento(status=StatusPedido.APROVADO)
        self.pedido_repo_mock.buscar_por_pagamento_id.return_value = _pedido(status=StatusPedido.APROVADO)

        self.use_case.executar('PAY-1')

        self.pedido_repo_mock.atualizar_status.assert_not_called()

    def test_pagamento_sem_pedido(self):
        self.gateway_mock.verificar_status.return_value = TransacaoPagamento(status=StatusPedido.APROVADO)
        self.pedido_repo_mock.buscar_por_pagamento_id.return_value = None

        self.assertIsNone(self.use_case.executar('PAY-X'))


class TestGerenciarPedidosAdmin(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.use_case = GerenciarPedidosAdminUseCase(self.pedido_repo_mock)

    def test_status_invalido(self):
        with self.assertRaises(StatusInvalidoError):
            self.use_case.atualizar_status_manual(1, 'enviado')
        self.pedido_repo_mock.atualizar_status.assert_not_called()

    def test_pedido_inexistente(self):
        self.pedido_repo_mock.atualizar_status.return_value = None
        with self.assertRaises(PedidoNaoEncontradoError):
            self.use_case.atualizar_status_manual(99, 'refunded')

    def test_estorno(self):
        self.pedido_repo_mock.atualizar_status.return_value = _pedido(status=StatusPedido.ESTORNADO)
        pedido = self.use_case.atualizar_status_manual(10, 'refunded')
        self.assertEqual(pedido.status, StatusPedido.ESTORNADO)


class TestGerenciarProdutosAdmin(unittest.TestCase):

    def setUp(self):
        self.produto_repo_mock = Mock()
        self.produto_repo_mock.salvar.side_effect = lambda p: p
        self.use_case = GerenciarProdutosAdminUseCase(self.produto_repo_mock)

    def test_criar_ignora_campos_desconhecidos(self):
        produto = self.use_case.criar({'nome': 'Anel', 'preco': Decimal('10'), 'estoque': 3})
        self.assertEqual(produto.nome, 'Anel')
        self.assertFalse(hasattr(produto, 'estoque'))

    def test_desconto_fora_do_intervalo(self):
        with self.assertRaises(DadosInvalidosError):
            self.use_case.criar({'nome': 'Anel', 'desconto_percentual': 150})

    def test_atualizar_produto_inexistente(self):
        self.produto_repo_mock.buscar_por_id.return_value = None
        with self.assertRaises(ProdutoNaoEncontradoError):
            self.use_case.atualizar(5, {'nome': 'Novo'})

    def test_detalhar_produto_inexistente(self):
        self.produto_repo_mock.buscar_por_id.return_value = None
        with self.assertRaises(ProdutoNaoEncontradoError):
            DetalharProdutoUseCase(self.produto_repo_mock).executar(5)


# ====================================================================
# TESTES DE RASTREAMENTO
# ====================================================================
class TestRastreio(unittest.TestCase):

    def setUp(self):
        self.pedido_repo_mock = Mock()
        self.consultar = ConsultarRastreioUseCase(self.pedido_repo_mock)

    def test_busca_por_codigo_de_rastreio(self):
        """
        Cenário: Identificador não numérico é tratado como código de rastreio (maiúsculo).
        """
        pedido = _pedido(codigo_rastreio='1234567A BR', enviado_em=AGORA - timedelta(days=4),
                         status=StatusPedido.APROVADO, criado_em=AGORA - timedelta(days=6))
        self.pedido_repo_mock.buscar_por_codigo_rastreio.return_value = pedido

        resultado = self.consultar.executar('1234567a br', AGORA)

        self.pedido_repo_mock.buscar_por_codigo_rastreio.assert_called_once_with('1234567A BR')
        self.assertEqual(resultado['status_rastreio'], StatusRastreio.EM_TRANSITO)
        self.assertEqual(len(resultado['linha_do_tempo']), 2)
        self.assertEqual(resultado['previsao_envio'], AGORA - timedelta(days=4))

    def test_pedido_inexistente(self):
        self.pedido_repo_mock.buscar_por_id.return_value = None
        self.pedido_repo_mock.buscar_por_codigo_rastreio.return_value = None
        with self.assertRaises(PedidoNaoEncontradoError):
            self.consultar.executar('77', AGORA)

    def test_atribuir_codigos_somente_apos_dois_dias(self):
        """
        Cenário: Apenas o pedido aprovado há 3 dias recebe código; o de ontem ainda não.
        """
        # ARRANGE
        antigo = _pedido(id=1, status=StatusPedido.APROVADO, criado_em=AGORA - timedelta(days=3))
        recente = _pedido(id=2, status=StatusPedido.APROVADO, criado_em=AGORA - timedelta(days=1))
        self.pedido_repo_mock.listar_aprovados_sem_rastreio.return_value = [antigo, recente]
        use_case = AtribuirCodigosRastreioUseCase(self.pedido_repo_mock, gerar_codigo=lambda: '7654321Z BR')

        # ACT
        use_case.executar(AGORA)

        # ASSERT
        self.pedido_repo_mock.registrar_envio.assert_called_once_with(
            1, '7654321Z BR', AGORA - timedelta(days=1)
        )

    def test_acompanhar_ate_a_entrega(self):
        """
        Cenário: O relógio avança 4 dias por leitura; a espera termina na entrega.
        """
        enviado = AGORA
        self.pedido_repo_mock.buscar_por_id.return_value = _pedido(enviado_em=enviado)
        leituras = iter([enviado + timedelta(days=d) for d in (0, 4, 8, 12)])
        vistos = []
        espera = EsperaLimitada(timeout=60, intervalo=1, relogio=lambda: 0, dormir=lambda s: None)

        status = AcompanharRastreioUseCase(self.consultar, espera, lambda: next(leituras)).executar(
            '10', ao_mudar=vistos.append
        )

        self.assertEqual(status, StatusRastreio.ENTREGUE)
        self.assertEqual(vistos, [
            StatusRastreio.EMBALADO, StatusRastreio.EM_TRANSITO,
            StatusRastreio.FISCALIZACAO, StatusRastreio.ENTREGUE,
        ])

    def test_acompanhar_com_tempo_esgotado(self):
        self.pedido_repo_mock.buscar_por_id.return_value = _pedido(enviado_em=AGORA)
        relogio = iter(range(0, 100))
        espera = EsperaLimitada(timeout=3, intervalo=1, relogio=lambda: next(relogio), dormir=lambda s: None)

        with self.assertRaises(TempoEsgotadoError):
            AcompanharRastreioUseCase(self.consultar, espera, lambda: AGORA).executar('10')


# ====================================================================
# TESTES DO USUÁRIO, CEP E UPLOAD
# ====================================================================
class TestLoginGoogle(unittest.TestCase):

    def setUp(self):
        self.provedor_mock = Mock()
        self.usuario_repo_mock = Mock()
        self.use_case = LoginGoogleUseCase(self.provedor_mock, self.usuario_repo_mock)
        self.provedor_mock.obter_perfil.return_value = {
            'id': 'g-1', 'email': 'ana@example.com', 'name': 'Ana', 'picture': 'https://img/ana.png',
        }

    def test_primeiro_login_cria_usuario(self):
        self.usuario_repo_mock.buscar_por_google_id.return_value = None
        self.usuario_repo_mock.buscar_por_email.return_value = None
        self.usuario_repo_mock.criar.side_effect = lambda u: u

        usuario = self.use_case.executar('codigo')

        self.assertEqual(usuario.google_id, 'g-1')
        self.assertEqual(usuario.nome, 'Ana')

    def test_email_existente_e_vinculado(self):
        self.usuario_repo_mock.buscar_por_google_id.return_value = None
        self.usuario_repo_mock.buscar_por_email.return_value = Usuario(id=3, email='ana@example.com')

        self.use_case.executar('codigo')

        self.usuario_repo_mock.vincular_google.assert_called_once_with(3, 'g-1', 'https://img/ana.png')
        self.usuario_repo_mock.criar.assert_not_called()

    def test_sem_codigo(self):
        with self.assertRaises(AutenticacaoFalhouError):
            self.use_case.executar('')
        self.provedor_mock.obter_perfil.assert_not_called()


class TestEnderecosCepUpload(unittest.TestCase):

    def test_endereco_salvo_vira_padrao(self):
        repo = Mock()
        repo.salvar_endereco.side_effect = lambda uid, e: e
        endereco = GerenciarEnderecosUseCase(repo).salvar(1, Endereco(rua='Rua A', numero='1', cep='01001000'))
        self.assertTrue(endereco.padrao)

    def test_endereco_incompleto(self):
        with self.assertRaises(DadosInvalidosError):
            GerenciarEnderecosUseCase(Mock()).salvar(1, Endereco(rua='Rua A'))

    def test_cep_invalido_nao_consulta(self):
        consulta = Mock()
        with self.assertRaises(DadosInvalidosError):
            ConsultarCepUseCase(consulta).executar('123')
        consulta.consultar.assert_not_called()

    def test_cep_normalizado_e_inexistente(self):
        consulta = Mock()
        consulta.consultar.return_value = None
        with self.assertRaises(ItemNaoEncontradoError):
            ConsultarCepUseCase(consulta).executar('01001-000')
        consulta.consultar.assert_called_once_with('01001000')

    def test_upload_somente_imagens(self):
        armazenamento = Mock()
        use_case = EnviarImagemUseCase(armazenamento)

        with self.assertRaises(DadosInvalidosError):
            use_case.executar('nota.pdf', 'application/pdf', 100, b'...')
        with self.assertRaises(DadosInvalidosError):
            use_case.executar('foto.png', 'image/png', 6 * 1024 * 1024, b'...')
        armazenamento.salvar.assert_not_called()

    def test_upload_gera_nome_unico(self):
        armazenamento = Mock()
        armazenamento.salvar.return_value = '/media/uploads/x.png'

        url = EnviarImagemUseCase(armazenamento).executar('Foto.PNG', 'image/png', 1024, b'...')

        self.assertEqual(url, '/media/uploads/x.png')
        nome = armazenamento.salvar.call_args.args[0]
        self.assertTrue(nome.endswith('.png'))
        self.assertNotEqual(nome, 'Foto.PNG')


if __name__ == '__main__':
    unittest.main()
