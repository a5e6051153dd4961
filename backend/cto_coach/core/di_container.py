"""Dependency Injector based DI Container."""

from dependency_injector import containers, providers

from cto_coach.core.config import get_config

# --- Factory Functions (defined before class to avoid NameError) ---


def _create_llm(config):
    """Create LLM provider."""
    from cto_coach.llm import LLMFactory

    return LLMFactory.create(config)


def _create_store(config):
    """Create the document and chat store."""
    from cto_coach.storage import StoreFactory

    return StoreFactory.create(config)


def _create_extractor():
    """Create file content extractor."""
    from cto_coach.documents.extractor import FileContentExtractor

    return FileContentExtractor()


def _create_document_service(config, store, extractor):
    """Create document service."""
    from cto_coach.documents.scoring import ScoringWeights
    from cto_coach.documents.service import DocumentService

    return DocumentService(
        store=store,
        extractor=extractor,
        upload_dir=config.upload.upload_dir,
        weights=ScoringWeights.from_config(config.search),
        default_limit=config.search.top_k,
    )


def _create_chat_service(store, document_service, llm):
    """Create chat service with its compiled graph."""
    from cto_coach.chat.service import ChatService

    return ChatService(store=store, document_service=document_service, llm=llm)


class DIContainer(containers.DeclarativeContainer):
    """Main dependency injection container."""

    # Configuration provider
    config = providers.Singleton(get_config)

    # LLM Provider
    llm = providers.Singleton(
        _create_llm,
        config=config.provided.llm,
    )

    # Document + chat persistence (one backend serves both)
    store = providers.Singleton(
        _create_store,
        config=config.provided.store,
    )

    extractor = providers.Singleton(_create_extractor)

    document_service = providers.Singleton(
        _create_document_service,
        config=config,
        store=store,
        extractor=extractor,
    )

    chat_service = providers.Singleton(
        _create_chat_service,
        store=store,
        document_service=document_service,
        llm=llm,
    )


# Global container instance
container = DIContainer()
