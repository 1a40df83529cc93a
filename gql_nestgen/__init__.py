"""Generate NestJS GraphQL declarations from GraphQL schemas."""
