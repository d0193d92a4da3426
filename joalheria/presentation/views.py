import logging

from django.core.paginator import Paginator
from rest_framework import status
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import AllowAny, IsAuthenticated, IsAdminUser
from rest_framework.response import Response
from rest_framework.views import APIView

from joalheria.core.entities import (
    Banner, Cupom, DadosCliente, Endereco, ItemCarrinho, Promocao,
)
from joalheria.core.exceptions import (
    BaseErroCore,
    CarrinhoVazioError,
    CupomInvalidoError,
    DadosInvalidosError,
    EtapaInvalidaError,
    GatewayIndisponivelError,
    ItemNaoEncontradoError,
    PagamentoFalhouError,
    ServicoIndisponivelError,
    StatusInvalidoError,
)
from joalheria.core.checkout import formatar_cpf, formatar_telefone
from joalheria.core.filtros import FiltroProdutos
from joalheria.core.use_cases import (
    AtualizarStatusPorNotificacaoUseCase,
    ConsultarRastreioUseCase,
    DetalharProdutoUseCase,
    GerenciarBannersUseCase,
    GerenciarConfiguracoesUseCase,
    GerenciarCuponsUseCase,
    GerenciarEnderecosUseCase,
    GerenciarFavoritosUseCase,
    GerenciarPedidosAdminUseCase,
    GerenciarProdutosAdminUseCase,
    GerenciarPromocoesUseCase,
    ListarPedidosDoUsuarioUseCase,
    ListarProdutosUseCase,
    ValidarCupomUseCase,
)
from joalheria.infrastructure import instances
from .serializers import (
    AdicionarItemCarrinhoSerializer,
    AtualizarItemCarrinhoSerializer,
    AtualizarStatusPedidoSerializer,
    BannerSerializer,
    CheckoutSerializer,
    ConfiguracaoSiteSerializer,
    CriarPagamentoSerializer,
    CupomSerializer,
    EnderecoSerializer,
    FavoritoSerializer,
    PedidoSerializer,
    ProdutoSerializer,
    PromocaoSerializer,
    UploadSerializer,
    ValidarCupomSerializer,
    carrinho_para_resposta,
    checkout_para_resposta,
)

logger = logging.getLogger(__name__)


# ====================================================================
# VIEWS: Orquestram a requisição, a execução dos casos de uso e a resposta.
# ====================================================================

def erro(e: BaseErroCore, codigo=status.HTTP_400_BAD_REQUEST) -> Response:
    """Resposta padrão de erro da API: {'message': ...} (+ campos inválidos)."""
    corpo = {'message': e.message}
    if isinstance(e, DadosInvalidosError) and e.campos:
        corpo['fields'] = e.campos
    return Response(corpo, status=codigo)


class LeituraPublicaMixin:
    """GET liberado para todos; métodos de escrita exigem usuário administrador."""

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAdminUser()]


# ====================================================================
# 1. CATÁLOGO
# ====================================================================

class ProdutoListAPIView(LeituraPublicaMixin, APIView):
    """
    Lista os produtos com filtros opcionais (type, metal, stone) e ordenação
    (sort=price_asc|price_desc|newest). Com `page`, a resposta é paginada.
    """

    def get(self, request):
        filtro = FiltroProdutos.de_parametros(request.query_params)
        produtos = ListarProdutosUseCase(instances.produto_repo).executar(filtro)

        if 'page' not in request.query_params:
            return Response(ProdutoSerializer(produtos, many=True).data)

        try:
            pagina = int(request.query_params.get('page', 1))
            por_pagina = int(request.query_params.get('pageSize', 12))
        except ValueError:
            return Response({'message': 'Parâmetros de paginação inválidos.'}, status=status.HTTP_400_BAD_REQUEST)

        # Páginas fora do intervalo são ajustadas para a primeira/última
        paginador = Paginator(produtos, max(1, por_pagina))
        pagina_atual = paginador.get_page(max(1, pagina))
        return Response({
            'items': ProdutoSerializer(pagina_atual.object_list, many=True).data,
            'page': pagina_atual.number,
            'totalPages': paginador.num_pages,
            'total': paginador.count,
        })

    def post(self, request):
        serializer = ProdutoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            produto = GerenciarProdutosAdminUseCase(instances.produto_repo).criar(serializer.validated_data)
        except DadosInvalidosError as e:
            return erro(e)
        return Response(ProdutoSerializer(produto).data, status=status.HTTP_201_CREATED)


class ProdutoDetalheAPIView(LeituraPublicaMixin, APIView):

    def get(self, request, pk):
        try:
            produto = DetalharProdutoUseCase(instances.produto_repo).executar(pk)
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        return Response(ProdutoSerializer(produto).data)

    def patch(self, request, pk):
        serializer = ProdutoSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        try:
            produto = GerenciarProdutosAdminUseCase(instances.produto_repo).atualizar(pk, serializer.validated_data)
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        except DadosInvalidosError as e:
            return erro(e)
        return Response(ProdutoSerializer(produto).data)

    def delete(self, request, pk):
        try:
            GerenciarProdutosAdminUseCase(instances.produto_repo).deletar(pk)
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ConfiguracaoSiteListAPIView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):
        configuracoes = GerenciarConfiguracoesUseCase(instances.configuracao_repo).listar()
        return Response(ConfiguracaoSiteSerializer(configuracoes, many=True).data)


class ConfiguracaoSiteDetalheAPIView(APIView):
    permission_classes = [IsAdminUser]

    def put(self, request, chave):
        try:
            configuracao = GerenciarConfiguracoesUseCase(instances.configuracao_repo).salvar(
                chave, request.data.get('value')
            )
        except DadosInvalidosError as e:
            return erro(e)
        return Response(ConfiguracaoSiteSerializer(configuracao).data)


class BannerListAPIView(LeituraPublicaMixin, APIView):
    """Visitantes veem apenas banners ativos; administradores veem todos."""

    def get(self, request):
        somente_ativos = not request.user.is_staff
        banners = GerenciarBannersUseCase(instances.banner_repo).listar(somente_ativos=somente_ativos)
        return Response(BannerSerializer(banners, many=True).data)

    def post(self, request):
        serializer = BannerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            banner = GerenciarBannersUseCase(instances.banner_repo).criar(Banner(**serializer.validated_data))
        except DadosInvalidosError as e:
            return erro(e)
        return Response(BannerSerializer(banner).data, status=status.HTTP_201_CREATED)


class BannerDetalheAPIView(APIView):
    permission_classes = [IsAdminUser]

    def delete(self, request, pk):
        try:
            GerenciarBannersUseCase(instances.banner_repo).deletar(pk)
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ====================================================================
# 2. PROMOÇÕES E CUPONS
# ====================================================================

class PromocaoListAPIView(LeituraPublicaMixin, APIView):

    def get(self, request):
        promocoes = GerenciarPromocoesUseCase(instances.promocao_repo).listar()
        return Response(PromocaoSerializer(promocoes, many=True).data)

    def post(self, request):
        serializer = PromocaoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            promocao = GerenciarPromocoesUseCase(instances.promocao_repo).criar(Promocao(**serializer.validated_data))
        except DadosInvalidosError as e:
            return erro(e)
        return Response(PromocaoSerializer(promocao).data, status=status.HTTP_201_CREATED)


class PromocaoDetalheAPIView(APIView):
    permission_classes = [IsAdminUser]

    def delete(self, request, pk):
        try:
            GerenciarPromocoesUseCase(instances.promocao_repo).deletar(pk)
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CupomListAPIView(APIView):
    permission_classes = [IsAdminUser]

    def get(self, request):
        cupons = GerenciarCuponsUseCase(instances.cupom_repo).listar()
        return Response(CupomSerializer(cupons, many=True).data)

    def post(self, request):
        serializer = CupomSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            cupom = GerenciarCuponsUseCase(instances.cupom_repo).criar(Cupom(**serializer.validated_data))
        except DadosInvalidosError as e:
            return erro(e)
        return Response(CupomSerializer(cupom).data, status=status.HTTP_201_CREATED)


class CupomDetalheAPIView(APIView):
    permission_classes = [IsAdminUser]

    def delete(self, request, pk):
        try:
            GerenciarCuponsUseCase(instances.cupom_repo).deletar(pk)
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ValidarCupomAPIView(APIView):
    """Valida o cupom sem resgatá-lo (o uso é contado na criação do pedido)."""
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = ValidarCupomSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            cupom = ValidarCupomUseCase(instances.cupom_repo).executar(serializer.validated_data['code'])
        except CupomInvalidoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        return Response({'code': cupom.codigo, 'discountPercent': cupom.desconto_percentual})


# ====================================================================
# 3. CARRINHO (SESSÃO)
# ====================================================================

class CarrinhoAPIView(APIView):
    """
    API View para o carrinho guardado na sessão do visitante.
    Não exige login: o carrinho acompanha a sessão.
    """
    permission_classes = [AllowAny]

    def get(self, request):
        carrinho = instances.carrinho_da_sessao(request.session)
        return Response(carrinho_para_resposta(carrinho))

    def post(self, request):
        """Adiciona um produto (ou soma a quantidade, se já estiver no carrinho)."""
        serializer = AdicionarItemCarrinhoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        carrinho = instances.carrinho_da_sessao(request.session)

        try:
            produto = DetalharProdutoUseCase(instances.produto_repo).executar(serializer.validated_data['productId'])
            carrinho.adicionar_item(produto, serializer.validated_data['quantity'])
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        except DadosInvalidosError as e:
            return erro(e)
        return Response(carrinho_para_resposta(carrinho), status=status.HTTP_201_CREATED)

    def delete(self, request):
        """Esvazia o carrinho."""
        carrinho = instances.carrinho_da_sessao(request.session)
        carrinho.limpar()
        return Response(carrinho_para_resposta(carrinho))


class CarrinhoItemAPIView(APIView):
    permission_classes = [AllowAny]

    def patch(self, request, produto_id):
        """Altera a quantidade (mínimo 1) e/ou alterna a seleção do item."""
        serializer = AtualizarItemCarrinhoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        carrinho = instances.carrinho_da_sessao(request.session)

        try:
            if 'quantity' in serializer.validated_data:
                carrinho.atualizar_quantidade(produto_id, serializer.validated_data['quantity'])
            if serializer.validated_data['toggle']:
                carrinho.alternar_selecao(produto_id)
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        return Response(carrinho_para_resposta(carrinho))

    def delete(self, request, produto_id):
        carrinho = instances.carrinho_da_sessao(request.session)
        try:
            carrinho.remover_item(produto_id)
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        return Response(carrinho_para_resposta(carrinho))


class CarrinhoAlternarSelecaoAPIView(APIView):
    permission_classes = [AllowAny]

    def post(self, request, produto_id):
        carrinho = instances.carrinho_da_sessao(request.session)
        try:
            carrinho.alternar_selecao(produto_id)
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        return Response(carrinho_para_resposta(carrinho))


class CarrinhoSelecionarTodosAPIView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        carrinho = instances.carrinho_da_sessao(request.session)
        carrinho.selecionar_todos()
        return Response(carrinho_para_resposta(carrinho))


# ====================================================================
# 4. CHECKOUT
# ====================================================================

def _aplicar_dados_checkout(sequenciador, dados):
    """Repassa ao sequenciador os blocos enviados na requisição."""
    if 'customer' in dados:
        sequenciador.atualizar_cliente(dados['customer'])
    if 'address' in dados:
        sequenciador.atualizar_endereco(dados['address'])
    if 'paymentMethod' in dados:
        sequenciador.escolher_metodo(dados['paymentMethod'])
    if 'couponCode' in dados:
        sequenciador.aplicar_cupom(dados['couponCode'])


class CheckoutBaseAPIView(APIView):
    permission_classes = [AllowAny]

    def _responder(self, request, sequenciador, codigo=status.HTTP_200_OK):
        instances.salvar_checkout_na_sessao(request.session, sequenciador)
        return Response(checkout_para_resposta(sequenciador), status=codigo)

    def _validar(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data


class CheckoutAPIView(CheckoutBaseAPIView):
    """Estado do checkout em etapas, guardado na sessão."""

    def get(self, request):
        return Response(checkout_para_resposta(instances.checkout_da_sessao(request.session)))

    def patch(self, request):
        """Atualiza os dados da etapa corrente sem avançar."""
        dados = self._validar(request)
        sequenciador = instances.checkout_da_sessao(request.session)
        try:
            _aplicar_dados_checkout(sequenciador, dados)
        except (DadosInvalidosError, EtapaInvalidaError) as e:
            return erro(e)
        return self._responder(request, sequenciador)

    def delete(self, request):
        sequenciador = instances.checkout_da_sessao(request.session)
        sequenciador.reiniciar()
        return self._responder(request, sequenciador)


class CheckoutAvancarAPIView(CheckoutBaseAPIView):

    def post(self, request):
        dados = self._validar(request)
        sequenciador = instances.checkout_da_sessao(request.session)
        try:
            _aplicar_dados_checkout(sequenciador, dados)
            sequenciador.avancar(dados.get('payment'))
        except (DadosInvalidosError, EtapaInvalidaError, CarrinhoVazioError) as e:
            # A guarda falhou: a etapa não muda
            instances.salvar_checkout_na_sessao(request.session, sequenciador)
            return erro(e)
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        return self._responder(request, sequenciador)


class CheckoutVoltarAPIView(CheckoutBaseAPIView):

    def post(self, request):
        sequenciador = instances.checkout_da_sessao(request.session)
        try:
            sequenciador.voltar()
        except EtapaInvalidaError as e:
            return erro(e)
        return self._responder(request, sequenciador)


class CheckoutPagarAPIView(CheckoutBaseAPIView):
    """
    Revisão -> Confirmação. Recusas e falhas do gateway mantêm o checkout
    na revisão com `error` preenchido (status 200, o estado é recuperável).
    """

    def post(self, request):
        dados = self._validar(request)
        sequenciador = instances.checkout_da_sessao(request.session)
        try:
            sequenciador.pagar(dados.get('payment'))
        except (EtapaInvalidaError, CarrinhoVazioError, DadosInvalidosError) as e:
            return erro(e)
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        return self._responder(request, sequenciador)


# ====================================================================
# 5. PAGAMENTO E WEBHOOK
# ====================================================================

class CriarPagamentoAPIView(APIView):
    """
    Cria o pedido e o pagamento em uma única chamada.
    O total é recalculado a partir dos preços do catálogo.
    """
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = CriarPagamentoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data
        comprador = dados['customerData']

        cliente = DadosCliente(
            nome=dados['name'],
            email=dados['email'],
            telefone=formatar_telefone(comprador['phone']),
            cpf=formatar_cpf(comprador['cpf']),
        )
        endereco = Endereco(**comprador['address'])
        itens = [
            ItemCarrinho(
                produto_id=item['id'],
                nome=item.get('name', ''),
                preco=item.get('price') or 0,
                quantidade=item['quantity'],
            )
            for item in dados['items']
        ]
        dados_pagamento = {
            'token': dados.get('token'),
            'installments': dados.get('installments'),
            'payment_method_id': dados.get('paymentMethodId'),
        }

        try:
            pedido, transacao = instances.criar_pagamento_use_case().executar(
                cliente=cliente,
                endereco=endereco,
                metodo_pagamento=dados['paymentMethod'],
                itens=itens,
                codigo_cupom=dados.get('couponCode'),
                dados_pagamento=dados_pagamento,
            )
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        except GatewayIndisponivelError as e:
            return Response({'success': False, 'message': e.message}, status=status.HTTP_502_BAD_GATEWAY)
        except (PagamentoFalhouError, CupomInvalidoError, DadosInvalidosError, CarrinhoVazioError) as e:
            return Response({'success': False, 'message': e.message}, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            'success': transacao.aceito,
            'orderId': pedido.id,
            'paymentStatus': transacao.status.value,
            'paymentId': transacao.referencia_externa,
            'qrCode': transacao.qr_code,
            'qrCodeBase64': transacao.qr_code_base64,
            'boletoUrl': transacao.boleto_url,
            'message': transacao.detalhe,
        }, status=status.HTTP_201_CREATED)


class WebhookMercadoPago(APIView):
    """
    Recebe as notificações do Mercado Pago para atualizar o status do pedido.
    Aceita o formato novo ({type, data: {id}}) e o IPN ({topic, resource}).
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def post(self, request):
        data = request.data
        topico = data.get('type') or data.get('topic') or request.query_params.get('topic')
        pagamento_id = (data.get('data') or {}).get('id') or data.get('resource') or request.query_params.get('id')

        if topico != 'payment' or not pagamento_id:
            return Response(status=status.HTTP_400_BAD_REQUEST)

        pagamento_id = str(pagamento_id).rstrip('/').split('/')[-1]
        uc = AtualizarStatusPorNotificacaoUseCase(instances.pedido_repo, instances.pagamento_gateway(), instances.cupom_repo)
        try:
            uc.executar(pagamento_id)
        except PagamentoFalhouError as e:
            # O Mercado Pago reenvia a notificação quando a resposta não é 2xx
            logger.error("Erro ao processar webhook do pagamento %s: %s", pagamento_id, e.message)
            return Response({'message': e.message}, status=status.HTTP_502_BAD_GATEWAY)

        return Response(status=status.HTTP_200_OK)


# ====================================================================
# 6. PEDIDOS E RASTREAMENTO
# ====================================================================

class PedidoDetalheAPIView(APIView):
    """
    Detalhe do pedido pelo ID ou pelo código de rastreio, com o status de
    rastreamento derivado do tempo desde o envio e a linha do tempo.
    """
    permission_classes = [AllowAny]

    def get(self, request, identificador):
        try:
            rastreio = ConsultarRastreioUseCase(instances.pedido_repo).executar(identificador, instances.agora())
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)

        dados = PedidoSerializer(rastreio['pedido']).data
        dados['trackingStatus'] = rastreio['status_rastreio'].value
        dados['trackingInfo'] = rastreio['info']
        dados['timeline'] = [
            {**etapa, 'data': etapa['data'].isoformat()} for etapa in rastreio['linha_do_tempo']
        ]
        previsao = rastreio['previsao_envio']
        dados['estimatedShipDate'] = previsao.isoformat() if previsao else None
        return Response(dados)


class PedidosUsuarioAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        pedidos = ListarPedidosDoUsuarioUseCase(instances.pedido_repo).executar(request.user.email)
        return Response(PedidoSerializer(pedidos, many=True).data)


class PedidosAdminAPIView(APIView):
    permission_classes = [IsAdminUser]

    def get(self, request):
        pedidos = GerenciarPedidosAdminUseCase(instances.pedido_repo).listar_todos()
        return Response(PedidoSerializer(pedidos, many=True).data)


class AtualizarStatusPedidoAdminAPIView(APIView):
    permission_classes = [IsAdminUser]

    def patch(self, request, pk):
        serializer = AtualizarStatusPedidoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            pedido = GerenciarPedidosAdminUseCase(instances.pedido_repo).atualizar_status_manual(
                pk, serializer.validated_data['status']
            )
        except StatusInvalidoError as e:
            return erro(e)
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        return Response(PedidoSerializer(pedido).data)


# ====================================================================
# 7. ÁREA DO CLIENTE (ENDEREÇOS E FAVORITOS)
# ====================================================================

class EnderecosUsuarioAPIView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        enderecos = GerenciarEnderecosUseCase(instances.usuario_repo).listar(request.user.id)
        return Response(EnderecoSerializer(enderecos, many=True).data)

    def post(self, request):
        """Salva o endereço, que passa a ser o padrão do usuário."""
        serializer = EnderecoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            endereco = GerenciarEnderecosUseCase(instances.usuario_repo).salvar(
                request.user.id, Endereco(**serializer.validated_data)
            )
        except DadosInvalidosError as e:
            return erro(e)
        return Response(EnderecoSerializer(endereco).data, status=status.HTTP_201_CREATED)


class FavoritosUseCaseMixin:

    def _uc(self):
        return GerenciarFavoritosUseCase(instances.usuario_repo, instances.produto_repo)


class FavoritosAPIView(FavoritosUseCaseMixin, APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({'productIds': self._uc().listar(request.user.id)})

    def post(self, request):
        serializer = FavoritoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            self._uc().adicionar(request.user.id, serializer.validated_data['productId'])
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        return Response({'productIds': self._uc().listar(request.user.id)}, status=status.HTTP_201_CREATED)


class FavoritoDetalheAPIView(FavoritosUseCaseMixin, APIView):
    permission_classes = [IsAuthenticated]

    def delete(self, request, produto_id):
        self._uc().remover(request.user.id, produto_id)
        return Response({'productIds': self._uc().listar(request.user.id)})


# ====================================================================
# 8. UTILITÁRIOS (UPLOAD E CEP)
# ====================================================================

class UploadAPIView(APIView):
    permission_classes = [IsAdminUser]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        serializer = UploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        arquivo = serializer.validated_data['file']
        try:
            url = instances.enviar_imagem_use_case().executar(
                nome=arquivo.name,
                tipo_conteudo=arquivo.content_type,
                tamanho=arquivo.size,
                conteudo=arquivo,
            )
        except DadosInvalidosError as e:
            return erro(e)
        return Response({'url': url}, status=status.HTTP_201_CREATED)


class CepAPIView(APIView):
    permission_classes = [AllowAny]

    def get(self, request, cep):
        try:
            endereco = instances.consultar_cep_use_case().executar(cep)
        except DadosInvalidosError as e:
            return erro(e)
        except ItemNaoEncontradoError as e:
            return erro(e, status.HTTP_404_NOT_FOUND)
        except ServicoIndisponivelError as e:
            return erro(e, status.HTTP_502_BAD_GATEWAY)
        return Response({
            'rua': endereco.rua,
            'bairro': endereco.bairro,
            'cidade': endereco.cidade,
            'estado': endereco.estado,
        })
