"""API: camada de borda.

Responsabilidades:
- Receber requests de relay e validar corpo/formulário
- Construir payloads para a Telegram Bot API
- Executar IO com o backend e classificar respostas

Subpastas:
- connectors/: adapters HTTP do backend
- payload_builders/: construção de payloads para APIs externas
- routes/: endpoints HTTP (relay, health)

NÃO PODE conter: regras de autorização de canal, orquestração de use cases.
"""
