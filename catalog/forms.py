"""
Form definitions for the `catalog` app.

* ``BrowseForm`` validates the browse page query string.
* ``AccountForm`` with ``SkinFormSet`` creates or edits an account and its
  ordered skin list from the admin screens.
* ``GameForm`` manages the storefront tabs.
"""
from __future__ import annotations

from django import forms

from .filters import DEFAULT_SORT, PRICE_BUCKET_CHOICES, SKIN_COUNT_OPTIONS, SORT_CHOICES
from .models import Account, Game, Skin


def apply_bootstrap(form: forms.BaseForm) -> None:
    for field in form.fields.values():
        if isinstance(field.widget, forms.CheckboxInput):
            field.widget.attrs.setdefault('class', 'form-check-input')
            continue
        css_class = 'form-select' if isinstance(field.widget, forms.Select) else 'form-control'
        field.widget.attrs.setdefault('class', css_class)


class BrowseForm(forms.Form):
    game = forms.SlugField(required=False)
    q = forms.CharField(required=False, max_length=100)
    price = forms.ChoiceField(choices=PRICE_BUCKET_CHOICES, required=False)
    skins = forms.TypedChoiceField(
        choices=[('', 'Any')] + [(str(n), str(n)) for n in SKIN_COUNT_OPTIONS],
        coerce=int, empty_value=None, required=False,
    )
    sort = forms.ChoiceField(choices=SORT_CHOICES, required=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        apply_bootstrap(self)

    def clean_sort(self):
        return self.cleaned_data.get('sort') or DEFAULT_SORT


class AccountForm(forms.ModelForm):
    """Responsible for Create/Update of an account in the admin screens."""

    class Meta:
        model = Account
        fields = ['title', 'game', 'price', 'bundle', 'image_url', 'featured']

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        apply_bootstrap(self)
        self.fields['price'].widget.attrs['inputmode'] = 'decimal'


class SkinForm(forms.ModelForm):
    class Meta:
        model = Skin
        fields = ['name', 'rarity']

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        apply_bootstrap(self)


SkinFormSet = forms.inlineformset_factory(
    Account, Skin, form=SkinForm, extra=3, can_delete=True,
)


class GameForm(forms.ModelForm):

    class Meta:
        model = Game
        fields = ['slug', 'name', 'verification', 'default_image_url', 'display_order']

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        apply_bootstrap(self)
