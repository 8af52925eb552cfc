"""
Constants for molparent package.

NORMALIZATIONS: (name, SMIRKS) functional group normalization rules, applied in order.
ACID_BASE_PAIRS: (name, acid SMARTS, base SMARTS), strongest acid first. The last atom is the ionizable site.
FRAGMENT_PATTERNS: (name, SMARTS) salts and solvents removed by the fragment remover.
TAUTOMER_TRANSFORMS: (name, SMARTS, bonds, charges) hydrogen shifts from the first to the last atom of the match.
TAUTOMER_SCORES: (name, SMARTS, score) substructure contributions to the canonical tautomer score.
SMARTS_METAL_NOF / SMARTS_METAL_NON: metal-ligand bonds broken by the metal disconnector.

"""

from __future__ import annotations
from typing import Tuple


NORMALIZATIONS: Tuple[Tuple[str, str], ...] = (
    # Uncharged N(=O)=O and friends to the charge-separated form
    ('Nitro to N+(O-)=O',
     '[N,P,As,Sb;X3:1](=[O,S,Se,Te:2])=[O,S,Se,Te:3]>>[*+1:1]([*-1:2])=[*:3]'),
    ('Sulfone to S(=O)(=O)',
     '[S+2:1]([O-:2])([O-:3])>>[S+0:1](=[O-0:2])(=[O-0:3])'),
    ('Pyridine oxide to n+O-',
     '[n:1]=[O:2]>>[n+:1][O-:2]'),
    ('Azide to N=N+=N-',
     '[*,H:1][N:2]=[N:3]#[N:4]>>[*,H:1][N:2]=[N+:3]=[N-:4]'),
    ('Diazo/azo to =N+=N-',
     '[*:1]=[N:2]#[N:3]>>[*:1]=[N+:2]=[N-:3]'),
    ('Sulfoxide to -S+(O-)-',
     '[!O:1][S+0;X3:2](=[O:3])[!O:4]>>[*:1][S+1:2]([O-:3])[*:4]'),
    ('Phosphate to P(O-)=O',
     '[O,S,Se,Te;-1:1][P+;D4:2][O,S,Se,Te;X1:3]>>[*+0:1]=[*:2]-[*-1:3]'),
    ('C/S+N to C/S=N+',
     '[C,S;X3+1:1]([NX3:2])[NX3!H0:3]>>[*+0:1]([N:2])=[N+:3]'),
    ('P+N to P=N+',
     '[P;X4+1:1]([NX3:2])[NX3!H0:3]>>[*+0:1]([N:2])=[N+:3]'),
    ('Recombine 1,3-separated charges',
     '[N,P,As,Sb,O,S,Se,Te;-1:1]-[A+0:2]=[N,P,As,Sb,O,S,Se,Te;+1:3]>>[*-0:1]=[*:2]-[*+0:3]'),
    ('Recombine 1,3-separated charges (aromatic anion)',
     '[n,o,p,s;-1:1]:[a:2]=[N,O,P,S;+1:3]>>[*-0:1]:[*:2]-[*+0:3]'),
    ('Recombine 1,3-separated charges (aromatic cation)',
     '[N,O,P,S;-1:1]-[a:2]:[n,o,p,s;+1:3]>>[*-0:1]=[*:2]:[*+0:3]'),
    ('Recombine 1,5-separated charges',
     '[N,P,As,Sb,O,S,Se,Te;-1:1]-[A+0:2]=[A:3]-[A:4]=[N,P,As,Sb,O,S,Se,Te;+1:5]>>[*-0:1]=[*:2]-[*:3]=[*:4]-[*+0:5]'),
    ('Recombine 1,5-separated charges (aromatic anion)',
     '[n,o,p,s;-1:1]:[a:2]:[a:3]:[c:4]=[N,O,P,S;+1:5]>>[*-0:1]:[*:2]:[*:3]:[c:4]-[*+0:5]'),
    ('Recombine 1,5-separated charges (aromatic cation)',
     '[N,O,P,S;-1:1]-[c:2]:[a:3]:[a:4]:[n,o,p,s;+1:5]>>[*-0:1]=[c:2]:[*:3]:[*:4]:[*+0:5]'),
    ('Normalize 1,3 conjugated cation',
     '[N,O;+0!H0:1]-[A:2]=[N!$(*[O-]),O;+1H0:3]>>[*+1:1]=[*:2]-[*+0:3]'),
    ('Normalize 1,3 conjugated cation (aromatic)',
     '[n;+0!H0:1]:[c:2]=[N!$(*[O-]),O;+1H0:3]>>[*+1:1]:[*:2]-[*+0:3]'),
    ('Normalize 1,5 conjugated cation',
     '[N,O;+0!H0:1]-[A:2]=[A:3]-[A:4]=[N!$(*[O-]),O;+1H0:5]>>[*+1:1]=[*:2]-[*:3]=[*:4]-[*+0:5]'),
    ('Normalize 1,5 conjugated cation (aromatic)',
     '[n;+0!H0:1]:[a:2]:[a:3]:[c:4]=[N!$(*[O-]),O;+1H0:5]>>[n+1:1]:[*:2]:[*:3]:[*:4]-[*+0:5]'),
    ('Charge normalization',
     '[F,Cl,Br,I,At;-1:1]=[O:2]>>[*-0:1][O-:2]'),
    ('Charge recombination',
     '[N,P,As,Sb;-1:1]=[C+;v3:2]>>[*+0:1]#[C+0:2]'),
)


ACID_BASE_PAIRS: Tuple[Tuple[str, str, str], ...] = (
    ('-OSO3H', 'OS(=O)(=O)[OH]', 'OS(=O)(=O)[O-]'),
    ('-SO3H', '[!O]S(=O)(=O)[OH]', '[!O]S(=O)(=O)[O-]'),
    ('-OSO2H', 'O[SD3](=O)[OH]', 'O[SD3](=O)[O-]'),
    ('-SO2H', '[!O][SD3](=O)[OH]', '[!O][SD3](=O)[O-]'),
    ('-OPO3H2', 'OP(=O)([OH])[OH]', 'OP(=O)([OH])[O-]'),
    ('-PO3H2', '[!O]P(=O)([OH])[OH]', '[!O]P(=O)([OH])[O-]'),
    ('-CO2H', 'C(=O)[OH]', 'C(=O)[O-]'),
    ('thiophenol', 'c[SH]', 'c[S-]'),
    ('(-OPO3H)-', 'OP(=O)([O-])[OH]', 'OP(=O)([O-])[O-]'),
    ('(-PO3H)-', '[!O]P(=O)([O-])[OH]', '[!O]P(=O)([O-])[O-]'),
    ('phthalimide', 'O=C2c1ccccc1C(=O)[NH]2', 'O=C2c1ccccc1C(=O)[N-]2'),
    ('CO3H (peracetyl)', 'C(=O)O[OH]', 'C(=O)O[O-]'),
    ('alpha-carbon-hydrogen-nitro group', 'O=N(O)[CH]', 'O=N(O)[C-]'),
    ('-SO2NH2', 'S(=O)(=O)[NH2]', 'S(=O)(=O)[NH-]'),
    ('-OBO2H2', 'OB([OH])[OH]', 'OB([OH])[O-]'),
    ('-BO2H2', '[!O]B([OH])[OH]', '[!O]B([OH])[O-]'),
    ('phenol', 'c[OH]', 'c[O-]'),
    ('SH (aliphatic)', 'C[SH]', 'C[S-]'),
    ('(-OBO2H)-', 'OB([O-])[OH]', 'OB([O-])[O-]'),
    ('(-BO2H)-', '[!O]B([O-])[OH]', '[!O]B([O-])[O-]'),
    ('cyclopentadiene', 'C1=CC=C[CH2]1', 'c1ccc[cH-]1'),
    ('-CONH2', 'C(=O)[NH2]', 'C(=O)[NH-]'),
    ('imidazole', 'c1cnc[nH]1', 'c1cnc[n-]1'),
    ('-OH (aliphatic alcohol)', '[CX4][OH]', '[CX4][O-]'),
    ('alpha-carbon-hydrogen-keto group', 'O=C([!O])[C!H0+0]', 'O=C([!O])[C-]'),
    ('alpha-carbon-hydrogen-acetyl ester group', 'OC(=O)[C!H0+0]', 'OC(=O)[C-]'),
    ('sulfoxide', 'S(=O)[C!H0+0]', 'S(=O)[C-]'),
    ('alpha-carbon-hydrogen-sulfone group', 'S(=O)(=O)[C!H0+0]', 'S(=O)(=O)[C-]'),
    ('-NH2', '[CX4][NH2]', '[CX4][NH-]'),
)


FRAGMENT_PATTERNS: Tuple[Tuple[str, str], ...] = (
    # counterions
    ('hydrogen', '[H]'),
    ('fluorine', '[F]'),
    ('chlorine', '[Cl]'),
    ('bromine', '[Br]'),
    ('iodine', '[I]'),
    ('lithium', '[Li]'),
    ('sodium', '[Na]'),
    ('potassium', '[K]'),
    ('calcium', '[Ca]'),
    ('magnesium', '[Mg]'),
    ('aluminium', '[Al]'),
    ('barium', '[Ba]'),
    ('bismuth', '[Bi]'),
    ('silver', '[Ag]'),
    ('strontium', '[Sr]'),
    ('zinc', '[Zn]'),
    ('ammonia/ammonium', '[#7]'),
    ('water/hydroxide', '[#8]'),
    ('methyl amine', '[#6]-[#7]'),
    ('sulfide', '[#16]'),
    ('nitrate', '[#7](=[#8])(-[#8])-[#8]'),
    ('phosphate', '[P](=[#8])(-[#8])(-[#8])-[#8]'),
    ('hexafluorophosphate', '[P](-[#9])(-[#9])(-[#9])(-[#9])(-[#9])-[#9]'),
    ('sulfate', '[S](=[#8])(=[#8])(-[#8])-[#8]'),
    ('methyl sulfonate', '[#6]-[S](=[#8])(=[#8])(-[#8])'),
    ('trifluoromethanesulfonic acid', '[#8]-[S](=[#8])(=[#8])-[#6](-[#9])(-[#9])-[#9]'),
    ('trifluoroacetic acid', '[#9]-[#6](-[#9])(-[#9])-[#6](=[#8])-[#8]'),
    ('tetrafluoroborate', '[B](-[#9])(-[#9])(-[#9])-[#9]'),
    # solvents
    ('1,2-dichloroethane', '[Cl]-[#6]-[#6]-[Cl]'),
    ('1,2-dimethoxyethane', '[#6]-[#8]-[#6]-[#6]-[#8]-[#6]'),
    ('1,4-dioxane', '[#6]-1-[#6]-[#8]-[#6]-[#6]-[#8]-1'),
    ('1-methyl-2-pyrrolidinone', '[#6]-[#7]-1-[#6]-[#6]-[#6]-[#6]-1=[#8]'),
    ('2-butanone', '[#6]-[#6]-[#6](-[#6])=[#8]'),
    ('acetate/acetic acid', '[#8]-[#6](-[#6])=[#8]'),
    ('acetone', '[#6]-[#6](-[#6])=[#8]'),
    ('acetonitrile', '[#6]-[#6]#[N]'),
    ('benzene', '[#6]1~[#6]~[#6]~[#6]~[#6]~[#6]~1'),
    ('butanol', '[#8]-[#6]-[#6]-[#6]-[#6]'),
    ('t-butanol', '[#8]-[#6](-[#6])(-[#6])-[#6]'),
    ('chloroform', '[Cl]-[#6](-[Cl])-[Cl]'),
    ('cycloheptane', '[#6]-1-[#6]-[#6]-[#6]-[#6]-[#6]-[#6]-1'),
    ('cyclohexane', '[#6]-1-[#6]-[#6]-[#6]-[#6]-[#6]-1'),
    ('dichloromethane', '[#6](-[Cl])-[Cl]'),
    ('diethyl ether', '[#6]-[#6]-[#8]-[#6]-[#6]'),
    ('diisopropyl ether', '[#6]-[#6](-[#6])-[#8]-[#6](-[#6])-[#6]'),
    ('dimethyl formamide', '[#6]-[#7](-[#6])-[#6]=[#8]'),
    ('dimethyl sulfoxide', '[#6]-[#16](-[#6])~[#8]'),
    ('ethanol', '[#8]-[#6]-[#6]'),
    ('ethyl acetate', '[#6]-[#6]-[#8]-[#6](-[#6])=[#8]'),
    ('formic acid', '[#8]-[#6]=[#8]'),
    ('heptane', '[#6]-[#6]-[#6]-[#6]-[#6]-[#6]-[#6]'),
    ('hexane', '[#6]-[#6]-[#6]-[#6]-[#6]-[#6]'),
    ('isopropanol', '[#8]-[#6](-[#6])-[#6]'),
    ('methanol', '[#8]-[#6]'),
    ('N,N-dimethylacetamide', '[#6]-[#7](-[#6])-[#6](-[#6])=[#8]'),
    ('pentane', '[#6]-[#6]-[#6]-[#6]-[#6]'),
    ('propanol', '[#8]-[#6]-[#6]-[#6]'),
    ('pyridine', '[#6]1~[#6]~[#6]~[#7]~[#6]~[#6]~1'),
    ('t-butyl methyl ether', '[#6]-[#8]-[#6](-[#6])(-[#6])-[#6]'),
    ('tetrahydrofurane', '[#6]-1-[#6]-[#6]-[#8]-[#6]-1'),
    ('toluene', '[#6]-[#6]~1~[#6]~[#6]~[#6]~[#6]~[#6]~1'),
    ('xylene', '[#6]-[#6]~1~[#6](-[#6])~[#6]~[#6]~[#6]~[#6]~1'),
)


# bonds: new bond types along the matched path ('-', '=', '#', ':'); empty toggles single/double
# charges: formal charge change per matched atom ('+', '-', '0'); empty leaves charges alone
TAUTOMER_TRANSFORMS: Tuple[Tuple[str, str, str, str], ...] = (
    ('1,3 (thio)keto/enol f', '[CX4!H0]-[C]=[O,S,Se,Te;X1]', '', ''),
    ('1,3 (thio)keto/enol r', '[O,S,Se,Te;X2!H0]-[C]=[C]', '', ''),
    ('1,5 (thio)keto/enol f', '[CX4,NX3;!H0]-[C]=[C]-[CH0]=[O,S,Se,Te;X1]', '', ''),
    ('1,5 (thio)keto/enol r', '[O,S,Se,Te;X2!H0]-[CH0]=[C]-[C]=[C,N]', '', ''),
    ('aliphatic imine f', '[CX4!H0]-[C]=[NX2]', '', ''),
    ('aliphatic imine r', '[NX3!H0]-[C]=[CX3]', '', ''),
    ('special imine f', '[N!H0]-[C]=[CX3R0]', '', ''),
    ('1,3 aromatic heteroatom H shift f', '[#7!H0]-[#6R1]=[O,#7X2]', '', ''),
    ('1,3 aromatic heteroatom H shift r', '[O,#7;!H0]-[#6R1]=[#7X2]', '', ''),
    ('1,3 heteroatom H shift', '[#7,S,O,Se,Te;!H0]-[#7X2,#6,#15]=[#7,#16,Se,Te]', '', ''),
    ('1,5 aromatic heteroatom H shift',
     '[#7,#16,#8,Se,Te;!H0]-[#6,#7X2]=[#6,#7X2]-[#6,#7X2]=[#7X2,S,O,Se,Te]', '', ''),
    ('1,7 aromatic heteroatom H shift',
     '[#7,#16,#8,Se,Te;!H0]-[#6,#7X2]=[#6,#7X2]-[#6,#7X2]=[#6,#7X2]-[#6,#7X2]=[#7X2,S,O,Se,Te]', '', ''),
    ('1,9 aromatic heteroatom H shift',
     '[#7,O;!H0]-[#6,#7X2]=[#6,#7X2]-[#6,#7X2]=[#6,#7X2]-[#6,#7X2]=[#6,#7X2]-[#6,#7X2]=[#7X2,O]', '', ''),
    ('furanone f', '[O,S,N;!H0]-[#6r5]=[#6X3r5;$([#6]([#6r5])=[#6r5])]', '', ''),
    ('furanone r', '[#6r5!H0;$([#6]([#6r5])[#6r5])]-[#6r5]=[O,S,N]', '', ''),
    ('keten/ynol f', '[C!H0]=[C]=[O,S,Se,Te;X1]', '#-', ''),
    ('keten/ynol r', '[O,S,Se,Te;!H0X2]-[C]#[C]', '==', ''),
    ('ionic nitro/aci-nitro f', '[C!H0]-[N+;$([N][O-])]=[O]', '', ''),
    ('ionic nitro/aci-nitro r', '[O!H0]-[N+;$([N][O-])]=[C]', '', ''),
    ('oxim/nitroso f', '[O!H0]-[N]=[C]', '', ''),
    ('oxim/nitroso r', '[C!H0]-[N]=[O]', '', ''),
    ('cyano/iso-cyanic acid f', '[O!H0]-[C]#[N]', '==', ''),
    ('cyano/iso-cyanic acid r', '[N!H0]=[C]=[O]', '#-', ''),
    ('isocyanide f', '[C-0!H0]#[N+0]', '#', '-+'),
    ('isocyanide r', '[N+!H0]#[C-]', '#', '-+'),
    ('phosphonic acid f', '[OH]-[PH0]', '=', ''),
    ('phosphonic acid r', '[PH]=[O]', '-', ''),
)


TAUTOMER_SCORES: Tuple[Tuple[str, str, int], ...] = (
    ('benzoquinone', '[#6]1([#6]=[#6][#6]([#6]=[#6]1)=,:[N,S,O])=,:[N,S,O]', 25),
    ('oxim', '[#6]=[N][OH]', 4),
    ('C=O', '[#6]=,:[#8]', 2),
    ('N=O', '[#7]=,:[#8]', 2),
    ('P=O', '[#15]=,:[#8]', 2),
    ('C=hetero', '[#6]=[!#1;!#6]', 1),
    ('methyl', '[CX4H3]', 1),
    ('guanidine terminal=N', '[#7][#6](=[NR0])[#7H0]', 1),
    ('guanidine endocyclic=N', '[#7;R][#6;R]([N])=[#7;R]', 2),
    ('aci-nitro', '[#6]=[N+]([O-])[OH]', -4),
)

# Ring scores and the hydrogen penalty that complement TAUTOMER_SCORES
AROMATIC_RING_SCORE = 100
CARBOCYCLIC_AROMATIC_RING_BONUS = 150
TAUTOMER_H_PENALTY_ELEMENTS = (15, 16, 34, 52)


# Metal to N, O or F: bond broken, charges moved by the bond order
SMARTS_METAL_NOF = (
    "[Li,Na,K,Rb,Cs,Fr,Be,Mg,Ca,Sr,Ba,Ra,Sc,Ti,V,Cr,Mn,Fe,Co,Ni,Cu,Zn,Al,Ga,Y,Zr,Nb,Mo,Tc,Ru,Rh,Pd,Ag,Cd,In,Sn,"
    "Hf,Ta,W,Re,Os,Ir,Pt,Au,Hg,Tl,Pb,Bi]~[#7,#8,F]"
)
# Transition metal to other non-metals (except N, O, F)
SMARTS_METAL_NON = (
    "[Al,Sc,Ti,V,Cr,Mn,Fe,Co,Ni,Cu,Zn,Y,Zr,Nb,Mo,Tc,Ru,Rh,Pd,Ag,Cd,Hf,Ta,W,Re,Os,Ir,Pt,Au]"
    "~[#5,#6,#14,#15,#33,#51,#16,#34,#52,Cl,Br,I,At]"
)
