from wash.infrastructure.par.codec import TarArchiveCodec

__all__ = ["TarArchiveCodec"]
