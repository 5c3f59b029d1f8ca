"""Glossing core: tokenizer, aligner, tagger, assembler, and the Gloss IR.

WHY: The core package holds the stable heart of the glosser, the three
pure text stages and the IR they produce. Every formatter consumes that
IR, so these modules must stay format-agnostic.

HOW: tokenizer.py splits tiers, aligner.py builds word columns,
tagger.py marks abbreviations, assembler.py runs the three over one
gloss, batch.py runs the assembler over many. options.py turns user
configuration into an immutable GlossOptions; source.py reads glosses
out of files.

RULES:
- IR dataclasses are the contract; change with care
- No module here writes files, touches markup, or holds mutable state
- Stage order per gloss is fixed: tokenize, align, tag, assemble
"""
