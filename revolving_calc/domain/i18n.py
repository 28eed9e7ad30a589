"""Localized labels, messages and legal templates (fr, en, nl, de)"""

from dataclasses import dataclass
from typing import Dict, Tuple

DEFAULT_LANGUAGE = "fr"


@dataclass(frozen=True)
class Translations:
    """Static strings and format templates for one language"""

    header_banner: str
    applied_range: str
    schedule_title: str
    col_months: str
    col_to_repay: str
    date_label: str
    teaser: str
    overview: str
    see_schedule_btn: str
    empty_cart: str
    too_high: str
    unavailable: str
    tab_labels: Tuple[str, str, str]
    legal_templates: Dict[str, str]
    date_sep: str = "/"

    def tab_label(self, index: int) -> str:
        """Positional range label; anything past the third slot uses the third"""
        if index < 0:
            return self.tab_labels[0]
        return self.tab_labels[min(index, len(self.tab_labels) - 1)]


_FR_BODY = (
    " avec un [[Taux Annuel Effectif Global (TAEG)]] de [[{apr_rep}%]] "
    "(taux débiteur variable : {apr_nom}% et frais de carte {fee_monthly}% par mois du capital restant dû). "
    "Taux valable au {date}."
)
_EN_BODY = (
    " with an [[Annual Percentage Rate (APR)]] of [[{apr_rep}%]] "
    "(variable borrowing rate: {apr_nom}% and card fee {fee_monthly}% per month on the outstanding balance). "
    "Rate valid on {date}."
)
_NL_BODY = (
    " met een [[Jaarlijks Kostenpercentage (JKP)]] van [[{apr_rep}%]] "
    "(variabele debetrente {apr_nom}% en kaartkosten {fee_monthly}% per maand op het openstaand saldo). "
    "Tarief geldig op {date}."
)
_DE_BODY = (
    " mit einem [[effektiven Jahreszins (APR)]] von [[{apr_rep}%]] "
    "(variabler Sollzinssatz: {apr_nom}% und Kartenentgelt {fee_monthly}% pro Monat auf den offenen Saldo). "
    "Zinssatz gültig am {date}."
)

TRANSLATIONS: Dict[str, Translations] = {
    "fr": Translations(
        header_banner="Attention, emprunter de l’argent coûte aussi de l’argent.",
        applied_range="Tranche appliquée : {label}",
        schedule_title="Crédit renouvelable",
        col_months="Mois",
        col_to_repay="Somme",
        date_label="Date de ce calcul",
        teaser="Ou à partir de {amount}/mois avec paiement échelonné.",
        overview="vue d'ensemble de budget pour un enregistrement unique de {total} €",
        see_schedule_btn="Voir l’échéancier",
        empty_cart="Votre panier est vide. Ajoutez des articles pour voir un échéancier.",
        too_high="Montant supérieur au plafond configuré.",
        unavailable="Indisponible pour l’instant.",
        tab_labels=("≤ 1 250 €", "1 250–5 000 €", "≥ 5 001 €"),
        legal_templates={
            "single": "Pour une [[ouverture de crédit à durée indéterminée]] de [[{amount}]]" + _FR_BODY,
            "between": "Pour une [[ouverture de crédit à durée indéterminée]] entre [[{min}]] et [[{max}]]" + _FR_BODY,
            "min": "Pour une [[ouverture de crédit à durée indéterminée]] de [[{min}]] et plus" + _FR_BODY,
        },
    ),
    "en": Translations(
        header_banner="Warning: borrowing money also costs money.",
        applied_range="Applied range: {label}",
        schedule_title="Revolving credit",
        col_months="Months",
        col_to_repay="Amount",
        date_label="Date of this calculation",
        teaser="Or from {amount}/month with instalments.",
        overview="budget overview for a single registration of €{total}",
        see_schedule_btn="See schedule",
        empty_cart="Your cart is empty. Add items to see a schedule.",
        too_high="Amount above the configured ceiling.",
        unavailable="Temporarily unavailable.",
        tab_labels=("≤ €1,250", "€1,250–€5,000", "≥ €5,001"),
        legal_templates={
            "single": "For an [[open-ended credit line]] of [[{amount}]]" + _EN_BODY,
            "between": "For an [[open-ended credit line]] between [[{min}]] and [[{max}]]" + _EN_BODY,
            "min": "For an [[open-ended credit line]] of [[{min}]] or more" + _EN_BODY,
        },
    ),
    "nl": Translations(
        header_banner="Let op, geld lenen kost ook geld.",
        applied_range="Toegepaste schijf: {label}",
        schedule_title="Doorlopend krediet",
        col_months="Maanden",
        col_to_repay="Bedrag",
        date_label="Datum van deze berekening",
        teaser="Of vanaf {amount}/maand met gespreid betalen.",
        overview="budgetoverzicht voor een eenmalige registratie van €{total}",
        see_schedule_btn="Schema bekijken",
        empty_cart="Uw winkelwagen is leeg. Voeg items toe om een schema te zien.",
        too_high="Bedrag boven de ingestelde limiet.",
        unavailable="Tijdelijk niet beschikbaar.",
        tab_labels=("≤ €1.250", "€1.250–€5.000", "≥ €5.001"),
        legal_templates={
            "single": "Voor een [[doorlopend krediet]] van [[{amount}]]" + _NL_BODY,
            "between": "Voor een [[doorlopend krediet]] tussen [[{min}]] en [[{max}]]" + _NL_BODY,
            "min": "Voor een [[doorlopend krediet]] van [[{min}]] of meer" + _NL_BODY,
        },
    ),
    "de": Translations(
        header_banner="Achtung: Geld leihen kostet ebenfalls Geld.",
        applied_range="Angewendete Spanne: {label}",
        schedule_title="Rahmenkredit",
        col_months="Monate",
        col_to_repay="Betrag",
        date_label="Datum dieser Berechnung",
        teaser="Oder ab {amount}/Monat mit Ratenzahlung.",
        overview="Budgetübersicht für eine einmalige Buchung von €{total}",
        see_schedule_btn="Plan anzeigen",
        empty_cart="Ihr Warenkorb ist leer. Fügen Sie Artikel hinzu, um einen Plan zu sehen.",
        too_high="Betrag über dem konfigurierten Limit.",
        unavailable="Vorübergehend nicht verfügbar.",
        tab_labels=("≤ 1.250 €", "1.250–5.000 €", "≥ 5.001 €"),
        legal_templates={
            "single": "Für eine [[unbefristete Kreditlinie]] von [[{amount}]]" + _DE_BODY,
            "between": "Für eine [[unbefristete Kreditlinie]] zwischen [[{min}]] und [[{max}]]" + _DE_BODY,
            "min": "Für eine [[unbefristete Kreditlinie]] ab [[{min}]]" + _DE_BODY,
        },
        date_sep=".",
    ),
}

SUPPORTED_LANGUAGES = tuple(TRANSLATIONS)


def get_translations(language: str) -> Translations:
    """Translations for a language, falling back to French"""
    return TRANSLATIONS.get(language, TRANSLATIONS[DEFAULT_LANGUAGE])


def normalize_language(language: str | None) -> str:
    return language if language in TRANSLATIONS else DEFAULT_LANGUAGE
