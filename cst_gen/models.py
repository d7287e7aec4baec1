from pydantic import BaseModel, ConfigDict


class DisplayConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    show_range: bool = True
    show_all_text: bool = False
    show_non_token_text: bool = False
    show_token_text: bool = True
    show_node_type: bool = False
    show_statement_separator: bool = False
    show_source_statement: bool = False

    @classmethod
    def from_args(cls, args) -> "DisplayConfig":
        """Build the toggles from parsed command-line flags.

        Sub-commands that do not define a flag fall back to the default.
        """
        return cls(
            show_range=not getattr(args, "hide_range", False),
            show_all_text=getattr(args, "show_all_text", False),
            show_non_token_text=getattr(args, "show_non_token_text", False),
            show_token_text=not getattr(args, "hide_token_text", False),
            show_node_type=getattr(args, "show_node_type", False),
            show_statement_separator=getattr(args, "statement_separator", False),
            show_source_statement=getattr(args, "show_statement", False),
        )

    def should_show_text(self, is_token: bool) -> bool:
        if is_token:
            return self.show_token_text
        return self.show_all_text or self.show_non_token_text
