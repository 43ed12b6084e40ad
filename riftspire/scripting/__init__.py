"""Block-based visual scripting: registry, execution context, VM and the built-in block sets."""