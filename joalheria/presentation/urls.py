"""
Define as rotas de API REST da loja: catálogo, back-office, carrinho,
checkout, pagamento, pedidos, área do cliente e autenticação Google.
"""
from django.urls import path
from . import views, views_auth


urlpatterns = [
    # ====================================================================
    # 1. ROTAS DE CATÁLOGO E BACK-OFFICE
    # ====================================================================
    path('api/products', views.ProdutoListAPIView.as_view(), name='api_produtos'),
    path('api/products/<int:pk>', views.ProdutoDetalheAPIView.as_view(), name='api_produto_detalhe'),
    path('api/site-settings', views.ConfiguracaoSiteListAPIView.as_view(), name='api_configuracoes'),
    path('api/site-settings/<str:chave>', views.ConfiguracaoSiteDetalheAPIView.as_view(), name='api_configuracao_detalhe'),
    path('api/promotions', views.PromocaoListAPIView.as_view(), name='api_promocoes'),
    path('api/promotions/<int:pk>', views.PromocaoDetalheAPIView.as_view(), name='api_promocao_detalhe'),
    path('api/coupons', views.CupomListAPIView.as_view(), name='api_cupons'),
    path('api/coupons/validate', views.ValidarCupomAPIView.as_view(), name='api_validar_cupom'),
    path('api/coupons/<int:pk>', views.CupomDetalheAPIView.as_view(), name='api_cupom_detalhe'),
    path('api/banners', views.BannerListAPIView.as_view(), name='api_banners'),
    path('api/banners/<int:pk>', views.BannerDetalheAPIView.as_view(), name='api_banner_detalhe'),

    # ====================================================================
    # 2. ROTAS DE COMPRA (CARRINHO, CHECKOUT E PAGAMENTO)
    # ====================================================================
    path('api/cart', views.CarrinhoAPIView.as_view(), name='api_carrinho'),
    path('api/cart/select-all', views.CarrinhoSelecionarTodosAPIView.as_view(), name='api_carrinho_selecionar_todos'),
    path('api/cart/<int:produto_id>', views.CarrinhoItemAPIView.as_view(), name='api_carrinho_item'),
    path('api/cart/<int:produto_id>/toggle', views.CarrinhoAlternarSelecaoAPIView.as_view(), name='api_carrinho_alternar'),
    path('api/checkout', views.CheckoutAPIView.as_view(), name='api_checkout'),
    path('api/checkout/next', views.CheckoutAvancarAPIView.as_view(), name='api_checkout_avancar'),
    path('api/checkout/back', views.CheckoutVoltarAPIView.as_view(), name='api_checkout_voltar'),
    path('api/checkout/pay', views.CheckoutPagarAPIView.as_view(), name='api_checkout_pagar'),
    path('api/payment/create', views.CriarPagamentoAPIView.as_view(), name='api_criar_pagamento'),

    # Webhook do Mercado Pago (Rota externa, não requer autenticação)
    path('api/webhook/mercadopago', views.WebhookMercadoPago.as_view(), name='webhook_mercadopago'),

    # ====================================================================
    # 3. ROTAS DE PEDIDOS
    # ====================================================================
    path('api/orders/<str:identificador>', views.PedidoDetalheAPIView.as_view(), name='api_pedido_detalhe'),
    path('api/admin/orders', views.PedidosAdminAPIView.as_view(), name='api_admin_pedidos'),
    path('api/admin/orders/<int:pk>/status', views.AtualizarStatusPedidoAdminAPIView.as_view(), name='api_admin_status_pedido'),

    # ====================================================================
    # 4. ROTAS DA ÁREA DO CLIENTE
    # ====================================================================
    path('api/user/orders', views.PedidosUsuarioAPIView.as_view(), name='api_pedidos_usuario'),
    path('api/user/addresses', views.EnderecosUsuarioAPIView.as_view(), name='api_enderecos_usuario'),
    path('api/user/favorites', views.FavoritosAPIView.as_view(), name='api_favoritos'),
    path('api/user/favorites/<int:produto_id>', views.FavoritoDetalheAPIView.as_view(), name='api_favorito_detalhe'),

    # ====================================================================
    # 5. ROTAS DE AUTENTICAÇÃO
    # ====================================================================
    path('auth/google', views_auth.GoogleLoginView.as_view(), name='login_google'),
    path('auth/google/callback', views_auth.GoogleCallbackView.as_view(), name='login_google_callback'),
    path('api/auth/me', views_auth.MeAPIView.as_view(), name='api_me'),
    path('api/auth/logout', views_auth.LogoutAPIView.as_view(), name='api_logout'),

    # ====================================================================
    # 6. UTILITÁRIOS
    # ====================================================================
    path('api/upload', views.UploadAPIView.as_view(), name='api_upload'),
    path('api/cep/<str:cep>', views.CepAPIView.as_view(), name='api_cep'),
]
