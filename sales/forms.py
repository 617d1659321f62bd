"""
Form definitions for the `sales` app.

``SellRequestForm`` is the seller's submission. Skin names are typed one per
line; the declared amount has to match the non-empty ones. The game's
verification method decides which of the extra fields are required.
"""
from __future__ import annotations

from django import forms

from catalog.forms import apply_bootstrap
from catalog.models import VERIFICATION_CREDENTIALS, VERIFICATION_DISCORD, Game


def split_skin_names(raw) -> list[str]:
    """Accepts a newline separated string or a list and drops blank entries."""
    if isinstance(raw, str):
        raw = raw.splitlines()
    return [name.strip() for name in raw or [] if name and name.strip()]


def check_skin_count(amount: int | None, names: list[str]) -> None:
    if not names:
        raise forms.ValidationError("Please enter at least one skin name.")
    if amount is not None and amount != len(names):
        raise forms.ValidationError(
            f"You declared {amount} skin(s) but entered {len(names)} skin name(s)."
        )


class SellRequestForm(forms.Form):
    title = forms.CharField(max_length=200)
    game = forms.ModelChoiceField(queryset=Game.objects.all(), to_field_name='slug', empty_label=None)
    price = forms.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    amount_of_skins = forms.IntegerField(min_value=1, label="Amount of skins")
    skin_names = forms.CharField(
        widget=forms.Textarea(attrs={'rows': 5, 'placeholder': 'One skin per line'}),
        help_text="One skin name per line.",
    )
    game_username = forms.CharField(max_length=150)
    game_password = forms.CharField(max_length=200, widget=forms.PasswordInput(render_value=True))

    # Extra verification, required depending on the game
    verification_email = forms.EmailField(required=False, label="Linked e-mail")
    verification_password = forms.CharField(
        required=False, max_length=200, label="E-mail password", widget=forms.PasswordInput(render_value=True),
    )
    discord_handle = forms.CharField(required=False, max_length=100, label="Your Discord handle")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        apply_bootstrap(self)

    def clean_skin_names(self) -> list[str]:
        return split_skin_names(self.cleaned_data.get('skin_names'))

    def clean(self):
        cleaned_data = super().clean()
        names = cleaned_data.get('skin_names')
        if names is not None:
            try:
                check_skin_count(cleaned_data.get('amount_of_skins'), names)
            except forms.ValidationError as e:
                self.add_error('skin_names', e)

        game = cleaned_data.get('game')
        if game is not None:
            if game.verification == VERIFICATION_CREDENTIALS:
                for field in ('verification_email', 'verification_password'):
                    if not cleaned_data.get(field) and field not in self.errors:
                        self.add_error(field, f"{game.name} requires the linked e-mail and its password.")
            elif game.verification == VERIFICATION_DISCORD:
                if not cleaned_data.get('discord_handle'):
                    self.add_error('discord_handle', f"{game.name} requires your Discord handle.")
        return cleaned_data


class ReviewForm(forms.Form):
    reviewer_discord_handle = forms.CharField(required=False, max_length=100, label="Your Discord handle")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        apply_bootstrap(self)
