"""Function catalog: help-text parsing, the description rule, the keyword index,
persistence and regeneration from the sapf binary."""
