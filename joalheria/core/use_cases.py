# joalheria/core/use_cases.py
"""
Implementação dos Casos de Uso (Lógica de Negócio) da aplicação.
Esta camada depende apenas das Entidades e Portas (Interfaces) do Core,
garantindo o isolamento da lógica de negócio.
"""
import logging
import os
import uuid
from typing import List, Optional, Dict, Any, Tuple, Callable
from decimal import Decimal
from datetime import datetime, timedelta

# Entidades e Exceções
from joalheria.core.entities import (
    Produto, Pedido, ItemPedido, ItemCarrinho, Usuario, TransacaoPagamento, Endereco,
    DadosCliente, StatusPedido, StatusRastreio, ConfiguracaoSite, Promocao, Cupom, Banner,
)
from joalheria.core.exceptions import (
    ProdutoNaoEncontradoError,
    PedidoNaoEncontradoError,
    CarrinhoVazioError,
    DadosInvalidosError,
    CupomInvalidoError,
    ItemNaoEncontradoError,
    PagamentoFalhouError,
    AutenticacaoFalhouError,
    StatusInvalidoError,
)
from joalheria.core.filtros import FiltroProdutos
from joalheria.core.espera import EsperaLimitada
from joalheria.core import rastreamento

# Portas (Interfaces) - Importadas de joalheria/core/ports.py
from joalheria.core.ports import (
    IProdutoRepository,
    IPedidoRepository,
    IConfiguracaoRepository,
    IPromocaoRepository,
    ICupomRepository,
    IBannerRepository,
    IUsuarioRepository,
    IGatewayPagamento,
    IConsultaCep,
    IProvedorIdentidade,
    IArmazenamentoArquivos,
)
from joalheria.core.checkout import METODOS_VALIDOS, CAMPOS_CLIENTE, somente_digitos

logger = logging.getLogger(__name__)


# ====================================================================
# 1. CASOS DE USO DO CATÁLOGO
# ====================================================================

class ListarProdutosUseCase:
    """Caso de Uso responsável por listar produtos com filtros e ordenação."""
    def __init__(self, produto_repo: IProdutoRepository):
        self.produto_repo = produto_repo

    def executar(self, filtro: Optional[FiltroProdutos] = None) -> List[Produto]:
        return self.produto_repo.buscar_por_filtro(filtro or FiltroProdutos())


class DetalharProdutoUseCase:
    """Caso de Uso para obter os detalhes de um produto específico."""
    def __init__(self, produto_repo: IProdutoRepository):
        self.produto_repo = produto_repo

    def executar(self, produto_id: int) -> Produto:
        produto = self.produto_repo.buscar_por_id(produto_id)
        if not produto:
            raise ProdutoNaoEncontradoError(f"Produto ID {produto_id} não encontrado.")
        return produto


class GerenciarProdutosAdminUseCase:
    """CRUD administrativo de produtos."""

    CAMPOS_EDITAVEIS = (
        'nome', 'descricao', 'preco', 'tipo', 'metal', 'pedra', 'imagens',
        'novidade', 'desconto_percentual', 'rotulo_desconto',
    )

    def __init__(self, produto_repo: IProdutoRepository):
        self.produto_repo = produto_repo

    @staticmethod
    def _validar_desconto(valor):
        if valor is not None and not 0 <= int(valor) <= 100:
            raise DadosInvalidosError("O desconto deve estar entre 0 e 100.", campos=['desconto_percentual'])

    def criar(self, dados: Dict[str, Any]) -> Produto:
        self._validar_desconto(dados.get('desconto_percentual'))
        produto = Produto(**{k: v for k, v in dados.items() if k in self.CAMPOS_EDITAVEIS and v is not None})
        return self.produto_repo.salvar(produto)

    def atualizar(self, produto_id: int, dados: Dict[str, Any]) -> Produto:
        produto = self.produto_repo.buscar_por_id(produto_id)
        if not produto:
            raise ProdutoNaoEncontradoError(f"Produto ID {produto_id} não encontrado.")
        self._validar_desconto(dados.get('desconto_percentual'))
        for campo, valor in dados.items():
            if campo in self.CAMPOS_EDITAVEIS:
                setattr(produto, campo, valor)
        return self.produto_repo.salvar(produto)

    def deletar(self, produto_id: int):
        if not self.produto_repo.deletar(produto_id):
            raise ProdutoNaoEncontradoError(f"Produto ID {produto_id} não encontrado.")


# ====================================================================
# 2. CASOS DE USO DE PAGAMENTO E PEDIDO
# ====================================================================

class ValidarCupomUseCase:
    def __init__(self, cupom_repo: ICupomRepository):
        self.cupom_repo = cupom_repo

    def executar(self, codigo: str) -> Cupom:
        codigo = (codigo or '').strip().upper()
        cupom = self.cupom_repo.buscar_por_codigo(codigo) if codigo else None
        if not cupom or not cupom.ativo:
            raise CupomInvalidoError(f"Cupom '{codigo}' inválido.")
        if cupom.esgotado:
            raise CupomInvalidoError(f"Cupom '{codigo}' esgotado.")
        return cupom


class CriarPagamentoUseCase:
    """
    Caso de Uso que coordena a finalização do checkout:
    Snapshot dos itens, Cupom, Pagamento via Gateway e Persistência do Pedido.
    """
    def __init__(self,
                 pedido_repo: IPedidoRepository,
                 produto_repo: IProdutoRepository,
                 cupom_repo: ICupomRepository,
                 pagamento_gateway: IGatewayPagamento):
        self.pedido_repo = pedido_repo
        self.produto_repo = produto_repo
        self.cupom_repo = cupom_repo
        self.pagamento_gateway = pagamento_gateway

    def _snapshot_itens(self, itens: List[ItemCarrinho]) -> List[ItemPedido]:
        """Cria o snapshot imutável com o preço atual do catálogo."""
        snapshot = []
        for item in itens:
            produto = self.produto_repo.buscar_por_id(item.produto_id)
            if not produto:
                raise ProdutoNaoEncontradoError(f"Produto ID {item.produto_id} não encontrado no catálogo.")
            snapshot.append(ItemPedido(
                produto_id=produto.id,
                nome=produto.nome or item.nome,
                preco=Decimal(produto.preco),
                quantidade=item.quantidade,
            ))
        return snapshot

    def executar(self,
                 cliente: DadosCliente,
                 endereco: Endereco,
                 metodo_pagamento: str,
                 itens: List[ItemCarrinho],
                 codigo_cupom: Optional[str] = None,
                 dados_pagamento: Optional[Dict[str, Any]] = None) -> Tuple[Pedido, TransacaoPagamento]:
        if not itens:
            raise CarrinhoVazioError("Não é possível finalizar o checkout sem itens selecionados.")
        if metodo_pagamento not in METODOS_VALIDOS:
            raise DadosInvalidosError(f"Método de pagamento inválido: {metodo_pagamento}.", campos=['paymentMethod'])
        faltando = [c for c in CAMPOS_CLIENTE if not getattr(cliente, c, '').strip()]
        if faltando:
            raise DadosInvalidosError("Dados do cliente incompletos.", campos=faltando)

        # 1. Snapshot e total
        itens_pedido = self._snapshot_itens(itens)
        total = sum((item.subtotal for item in itens_pedido), Decimal('0.00'))

        # 2. Cupom: validado e reservado antes de cobrar. A reserva é condicional
        # ao limite de usos e é desfeita quando o pagamento não é aceito.
        cupom = None
        if codigo_cupom:
            cupom = ValidarCupomUseCase(self.cupom_repo).executar(codigo_cupom)
            total = cupom.aplicar(total)
            self.cupom_repo.registrar_uso(cupom.codigo)

        pedido = Pedido(
            cliente=cliente,
            endereco_entrega=endereco,
            itens=itens_pedido,
            total=total,
            metodo_pagamento=metodo_pagamento,
            status=StatusPedido.PENDENTE,
            codigo_cupom=cupom.codigo if cupom else None,
        )
        pedido = self.pedido_repo.criar(pedido)

        # 3. Pagamento via Gateway
        try:
            transacao = self.pagamento_gateway.processar_pagamento(pedido, dados_pagamento or {})
        except PagamentoFalhouError:
            self.pedido_repo.atualizar_status(pedido.id, StatusPedido.REJEITADO)
            if cupom:
                self.cupom_repo.liberar_uso(cupom.codigo)
            raise
        logger.info("Pagamento do pedido #%s: %s (%s)", pedido.id, transacao.status.value, transacao.referencia_externa)

        # 4. Atualiza o pedido com o resultado
        pedido = self.pedido_repo.atualizar_status(
            pedido.id, transacao.status, pagamento_id=transacao.referencia_externa
        ) or pedido

        if cupom and not transacao.aceito:
            self.cupom_repo.liberar_uso(cupom.codigo)

        return pedido, transacao


class AtualizarStatusPorNotificacaoUseCase:
    """
    Use Case para atualizar o status de um pedido baseado na notificação
    de pagamento (Webhook). Um pedido pendente que passa a rejeitado
    devolve o uso do cupom reservado na criação.
    """
    def __init__(self,
                 pedido_repo: IPedidoRepository,
                 pagamento_gateway: IGatewayPagamento,
                 cupom_repo: Optional[ICupomRepository] = None):
        self.pedido_repo = pedido_repo
        self.pagamento_gateway = pagamento_gateway
        self.cupom_repo = cupom_repo

    def executar(self, pagamento_id: str) -> Optional[Pedido]:
        # 1. Buscar o status atual da transação no gateway (falhas propagam)
        transacao = self.pagamento_gateway.verificar_status(pagamento_id)

        # 2. Buscar o pedido correspondente
        pedido = self.pedido_repo.buscar_por_pagamento_id(pagamento_id)
        if not pedido:
            logger.warning("Notificação de pagamento %s sem pedido correspondente.", pagamento_id)
            return None

        # 3. Atualizar apenas quando o status muda
        if pedido.status == transacao.status:
            return pedido

        logger.info("Pedido #%s: %s -> %s", pedido.id, pedido.status.value, transacao.status.value)
        atualizado = self.pedido_repo.atualizar_status(pedido.id, transacao.status)

        if (pedido.codigo_cupom and self.cupom_repo
                and pedido.status == StatusPedido.PENDENTE and transacao.status == StatusPedido.REJEITADO):
            self.cupom_repo.liberar_uso(pedido.codigo_cupom)
        return atualizado


class ListarPedidosDoUsuarioUseCase:
    """Caso de Uso para listar os pedidos de um cliente (pelo e-mail)."""
    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def executar(self, email: str) -> List[Pedido]:
        return self.pedido_repo.listar_por_email(email)


class GerenciarPedidosAdminUseCase:
    """Listagem e atualização manual de pedidos (acesso administrativo)."""

    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def listar_todos(self) -> List[Pedido]:
        return self.pedido_repo.listar_todos()

    def atualizar_status_manual(self, pedido_id: int, novo_status: str) -> Pedido:
        try:
            status = StatusPedido(novo_status)
        except ValueError:
            raise StatusInvalidoError(f"O status '{novo_status}' não é um status de pedido válido.")

        pedido = self.pedido_repo.atualizar_status(pedido_id, status)
        if not pedido:
            raise PedidoNaoEncontradoError(f"Pedido ID {pedido_id} não encontrado.")
        return pedido


# ====================================================================
# 3. CASOS DE USO DE RASTREAMENTO
# ====================================================================

class ConsultarRastreioUseCase:
    """Busca um pedido pelo ID ou código de rastreio e deriva o status na leitura."""
    def __init__(self, pedido_repo: IPedidoRepository):
        self.pedido_repo = pedido_repo

    def buscar_pedido(self, identificador: str) -> Pedido:
        identificador = str(identificador).strip()
        pedido = None
        if identificador.isdigit():
            pedido = self.pedido_repo.buscar_por_id(int(identificador))
        if not pedido:
            pedido = self.pedido_repo.buscar_por_codigo_rastreio(identificador.upper())
        if not pedido:
            raise PedidoNaoEncontradoError(f"Pedido '{identificador}' não encontrado.")
        return pedido

    def executar(self, identificador: str, agora: datetime) -> Dict[str, Any]:
        pedido = self.buscar_pedido(identificador)
        status = rastreamento.status_rastreio_do_pedido(pedido, agora)
        previsao = None
        if pedido.status == StatusPedido.APROVADO and pedido.criado_em:
            previsao = rastreamento.data_estimada_envio(pedido.criado_em)
        return {
            'pedido': pedido,
            'status_rastreio': status,
            'info': rastreamento.info_rastreio(status),
            'linha_do_tempo': rastreamento.linha_do_tempo(pedido.enviado_em, agora),
            'previsao_envio': previsao,
        }


class AtribuirCodigosRastreioUseCase:
    """
    Gera código de rastreio para pedidos aprovados há pelo menos 2 dias.
    A data de envio é fixada em criado_em + 2 dias; o status continua derivado.
    """
    def __init__(self, pedido_repo: IPedidoRepository, gerar_codigo: Callable[[], str] = None):
        self.pedido_repo = pedido_repo
        self.gerar_codigo = gerar_codigo or rastreamento.gerar_codigo_rastreio

    def executar(self, agora: datetime) -> List[Pedido]:
        atualizados = []
        for pedido in self.pedido_repo.listar_aprovados_sem_rastreio():
            if pedido.criado_em is None:
                continue
            dias = (agora - pedido.criado_em) // timedelta(days=1)
            if dias < rastreamento.DIAS_ATE_ENVIO:
                continue
            codigo = self.gerar_codigo()
            enviado_em = rastreamento.data_estimada_envio(pedido.criado_em)
            atualizados.append(self.pedido_repo.registrar_envio(pedido.id, codigo, enviado_em))
            logger.info("Pedido #%s recebeu o código de rastreio %s.", pedido.id, codigo)
        return atualizados


class AcompanharRastreioUseCase:
    """
    Relê o status derivado de um pedido em intervalo fixo até a entrega,
    o fim do prazo ou o cancelamento da espera.
    """
    def __init__(self,
                 consultar: ConsultarRastreioUseCase,
                 espera: EsperaLimitada,
                 relogio: Callable[[], datetime]):
        self.consultar = consultar
        self.espera = espera
        self.relogio = relogio

    def executar(self, identificador: str, ao_mudar: Optional[Callable[[StatusRastreio], None]] = None) -> StatusRastreio:
        ultimo = {'status': None}

        def entregue():
            status = self.consultar.executar(identificador, self.relogio())['status_rastreio']
            if status != ultimo['status']:
                ultimo['status'] = status
                if ao_mudar:
                    ao_mudar(status)
            return status if status == StatusRastreio.ENTREGUE else None

        return self.espera.aguardar(entregue)


# ====================================================================
# 4. CASOS DE USO DO BACK-OFFICE
# ====================================================================

class GerenciarConfiguracoesUseCase:
    def __init__(self, configuracao_repo: IConfiguracaoRepository):
        self.configuracao_repo = configuracao_repo

    def listar(self) -> List[ConfiguracaoSite]:
        return self.configuracao_repo.listar()

    def salvar(self, chave: str, valor: Optional[str]) -> ConfiguracaoSite:
        if not chave or valor is None:
            raise DadosInvalidosError("Chave e valor são obrigatórios.", campos=['key', 'value'])
        return self.configuracao_repo.salvar(chave, str(valor))


class GerenciarPromocoesUseCase:
    def __init__(self, promocao_repo: IPromocaoRepository):
        self.promocao_repo = promocao_repo

    def listar(self) -> List[Promocao]:
        return self.promocao_repo.listar()

    def criar(self, promocao: Promocao) -> Promocao:
        if not 0 <= promocao.desconto_percentual <= 100:
            raise DadosInvalidosError("O desconto deve estar entre 0 e 100.", campos=['discountPercent'])
        promocao.codigo = promocao.codigo.strip().upper()
        return self.promocao_repo.criar(promocao)

    def deletar(self, promocao_id: int):
        if not self.promocao_repo.deletar(promocao_id):
            raise ItemNaoEncontradoError(f"Promoção ID {promocao_id} não encontrada.")


class GerenciarCuponsUseCase:
    def __init__(self, cupom_repo: ICupomRepository):
        self.cupom_repo = cupom_repo

    def listar(self) -> List[Cupom]:
        return self.cupom_repo.listar()

    def criar(self, cupom: Cupom) -> Cupom:
        if not 0 <= cupom.desconto_percentual <= 100:
            raise DadosInvalidosError("O desconto deve estar entre 0 e 100.", campos=['discountPercent'])
        if cupom.max_usos is not None and cupom.max_usos < 1:
            raise DadosInvalidosError("O limite de usos deve ser positivo.", campos=['maxUses'])
        cupom.codigo = cupom.codigo.strip().upper()
        return self.cupom_repo.criar(cupom)

    def deletar(self, cupom_id: int):
        if not self.cupom_repo.deletar(cupom_id):
            raise ItemNaoEncontradoError(f"Cupom ID {cupom_id} não encontrado.")


class GerenciarBannersUseCase:
    def __init__(self, banner_repo: IBannerRepository):
        self.banner_repo = banner_repo

    def listar(self, somente_ativos: bool = False) -> List[Banner]:
        return self.banner_repo.listar(somente_ativos=somente_ativos)

    def criar(self, banner: Banner) -> Banner:
        if not banner.titulo or not banner.imagem_url:
            raise DadosInvalidosError("Título e imagem são obrigatórios.", campos=['title', 'imageUrl'])
        return self.banner_repo.criar(banner)

    def deletar(self, banner_id: int):
        if not self.banner_repo.deletar(banner_id):
            raise ItemNaoEncontradoError(f"Banner ID {banner_id} não encontrado.")


# ====================================================================
# 5. CASOS DE USO DO USUÁRIO
# ====================================================================

class LoginGoogleUseCase:
    """Troca o código de autorização pelo perfil e cria o usuário no primeiro login."""
    def __init__(self, provedor: IProvedorIdentidade, usuario_repo: IUsuarioRepository):
        self.provedor = provedor
        self.usuario_repo = usuario_repo

    def executar(self, codigo: str) -> Usuario:
        if not codigo:
            raise AutenticacaoFalhouError("Código de autorização ausente.")

        perfil = self.provedor.obter_perfil(codigo)
        google_id = perfil.get('id')
        email = perfil.get('email')
        if not google_id or not email:
            raise AutenticacaoFalhouError("O provedor não retornou e-mail ou identificador.")

        usuario = self.usuario_repo.buscar_por_google_id(google_id)
        if usuario:
            return usuario

        usuario = self.usuario_repo.buscar_por_email(email)
        if usuario:
            return self.usuario_repo.vincular_google(usuario.id, google_id, perfil.get('picture'))

        logger.info("Novo usuário criado via Google: %s", email)
        return self.usuario_repo.criar(Usuario(
            email=email,
            nome=perfil.get('name') or email,
            google_id=google_id,
            avatar_url=perfil.get('picture'),
        ))


class GerenciarEnderecosUseCase:
    def __init__(self, usuario_repo: IUsuarioRepository):
        self.usuario_repo = usuario_repo

    def listar(self, usuario_id: int) -> List[Endereco]:
        return self.usuario_repo.listar_enderecos(usuario_id)

    def salvar(self, usuario_id: int, endereco: Endereco) -> Endereco:
        """O endereço salvo passa a ser o padrão do usuário."""
        faltando = [c for c in ('rua', 'numero', 'cep') if not getattr(endereco, c, '').strip()]
        if faltando:
            raise DadosInvalidosError("Endereço incompleto.", campos=faltando)
        endereco.padrao = True
        return self.usuario_repo.salvar_endereco(usuario_id, endereco)


class GerenciarFavoritosUseCase:
    def __init__(self, usuario_repo: IUsuarioRepository, produto_repo: IProdutoRepository):
        self.usuario_repo = usuario_repo
        self.produto_repo = produto_repo

    def listar(self, usuario_id: int) -> List[int]:
        return self.usuario_repo.listar_favoritos(usuario_id)

    def adicionar(self, usuario_id: int, produto_id: int):
        if not self.produto_repo.buscar_por_id(produto_id):
            raise ProdutoNaoEncontradoError(f"Produto ID {produto_id} não encontrado.")
        self.usuario_repo.adicionar_favorito(usuario_id, produto_id)

    def remover(self, usuario_id: int, produto_id: int):
        self.usuario_repo.remover_favorito(usuario_id, produto_id)


class ConsultarCepUseCase:
    def __init__(self, consulta_cep: IConsultaCep):
        self.consulta_cep = consulta_cep

    def executar(self, cep: str) -> Endereco:
        digitos = somente_digitos(cep)
        if len(digitos) != 8:
            raise DadosInvalidosError("O CEP deve ter 8 dígitos.", campos=['cep'])
        endereco = self.consulta_cep.consultar(digitos)
        if not endereco:
            raise ItemNaoEncontradoError(f"CEP {digitos} não encontrado.")
        return endereco


class EnviarImagemUseCase:
    """Valida e grava uma imagem enviada pelo painel, retornando a URL pública."""

    EXTENSOES_PERMITIDAS = ('.jpg', '.jpeg', '.png', '.gif', '.webp')
    TAMANHO_MAXIMO = 5 * 1024 * 1024

    def __init__(self, armazenamento: IArmazenamentoArquivos):
        self.armazenamento = armazenamento

    def executar(self, nome: str, tipo_conteudo: str, tamanho: int, conteudo) -> str:
        extensao = os.path.splitext(nome or '')[1].lower()
        if not (tipo_conteudo or '').startswith('image/') or extensao not in self.EXTENSOES_PERMITIDAS:
            raise DadosInvalidosError("Apenas imagens são permitidas.", campos=['file'])
        if tamanho > self.TAMANHO_MAXIMO:
            raise DadosInvalidosError("A imagem excede o limite de 5MB.", campos=['file'])
        return self.armazenamento.salvar(f"{uuid.uuid4().hex}{extensao}", conteudo)
