from wash.infrastructure.wasm.claims import WascapClaimsExtractor

__all__ = ["WascapClaimsExtractor"]
