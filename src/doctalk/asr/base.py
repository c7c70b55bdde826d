"""ASR registry."""

from doctalk.core import Registry, BaseASR

# ASR Registry - all ASR backends register here
ASRRegistry = Registry[BaseASR]("asr")
