"""Erreurs levées par le moteur et sa couche d'accès aux données."""


class InvalidProductError(ValueError):
    """Snapshot produit inutilisable par le moteur (prix courant nul, etc.)."""


class ProductNotFoundError(LookupError):
    """Le produit demandé n'existe pas dans le catalogue."""

    def __init__(self, product_id):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class DataAccessError(RuntimeError):
    """Configuration Supabase absente ou réponse invalide."""
