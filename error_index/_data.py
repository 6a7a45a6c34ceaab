PROVIDER_NAME_MAP: dict[str, str] = {
    # AI model providers
    "openai": "OpenAI",
    "anthropic": "Anthropic",
    "google": "Google",
    "cohere": "Cohere",
    "mistral": "Mistral AI",
    "mistral-ai": "Mistral AI",
    "palm": "PaLM",
    # Cloud & infrastructure
    "azure": "Azure",
    "azure-openai": "Azure",
    "aws": "AWS",
    "bedrock": "AWS Bedrock",
    "vertex": "Vertex AI",
    # Platform providers
    "anyscale": "Anyscale",
    "together": "Together AI",
    "together-ai": "Together AI",
    "fireworks": "Fireworks AI",
    "groq": "Groq",
    "cerebras": "Cerebras",
    # Open source & self-hosted
    "ollama": "Ollama",
    "huggingface": "Hugging Face",
    "litellm": "LiteLLM",
    # Specialized services
    "elevenlabs": "ElevenLabs",
    "perplexity": "Perplexity",
    "openrouter": "OpenRouter",
    "twilio": "Twilio",
    "vapi": "Vapi",
    "xai": "xAI",
}

PROVIDER_LOGO_MAP: dict[str, str] = {
    "openai": "openai",
    "anthropic": "anthropic",
    "google": "google",
    "cohere": "cohere",
    "mistral": "mistral",
    "mistral-ai": "mistral",
    "palm": "google",
    "azure": "azure",
    "azure-openai": "azure",
    "aws": "aws",
    "bedrock": "bedrock",
    "vertex": "vertex",
    "anyscale": "openai",
    "together": "together",
    "together-ai": "together",
    "fireworks": "fireworks",
    "groq": "groq",
    "cerebras": "cerebras",
    "ollama": "ollama",
    "huggingface": "huggingface",
    "litellm": "litellm",
    "elevenlabs": "elevenlabs",
    "perplexity": "perplexity",
    "openrouter": "openrouter",
    "twilio": "twilio",
    "vapi": "vapi",
    "xai": "xai",
}
