"""Static keyword catalogs used by heuristic resume extraction.

All entries are lowercase; matching is a case-insensitive substring test.
"""
from typing import Dict, List

TECHNICAL_SKILLS: Dict[str, List[str]] = {
    'Software Development': [
        'javascript', 'python', 'java', 'react', 'node.js', 'sql', 'mongodb',
        'git', 'docker', 'kubernetes', 'aws', 'azure', 'typescript', 'angular',
        'vue.js', 'spring boot', 'django', 'flask', 'express.js', 'rest api',
        'graphql', 'microservices', 'agile', 'scrum', 'ci/cd', 'jenkins',
        'terraform', 'ansible', 'redis', 'elasticsearch', 'kafka',
    ],
    'Data Science': [
        'python', 'r', 'sql', 'machine learning', 'deep learning', 'pandas',
        'numpy', 'scikit-learn', 'tensorflow', 'pytorch', 'jupyter',
        'matplotlib', 'seaborn', 'statistics', 'data visualization',
        'big data', 'hadoop', 'spark', 'tableau', 'power bi', 'excel',
    ],
    'Cybersecurity': [
        'network security', 'penetration testing', 'vulnerability assessment',
        'firewall', 'ids/ips', 'siem', 'incident response', 'cryptography',
        'ethical hacking', 'risk assessment', 'compliance', 'iso 27001',
        'cissp', 'ceh', 'wireshark', 'nmap', 'metasploit', 'burp suite',
    ],
    'Marketing': [
        'digital marketing', 'seo', 'sem', 'social media marketing',
        'content marketing', 'email marketing', 'google analytics',
        'google ads', 'facebook ads', 'marketing automation',
        'brand management', 'market research', 'copywriting',
        'conversion optimization', 'a/b testing', 'crm',
    ],
}

SOFT_SKILLS: List[str] = [
    'leadership', 'communication', 'teamwork', 'problem solving',
    'project management', 'time management', 'critical thinking',
    'adaptability', 'creativity', 'negotiation', 'presentation',
    'conflict resolution', 'mentoring', 'strategic thinking',
]

PROGRAMMING_LANGUAGES: List[str] = [
    'javascript', 'python', 'java', 'c++', 'c#', 'php', 'ruby', 'go',
    'rust', 'swift', 'kotlin', 'typescript', 'scala', 'perl', 'r', 'matlab',
]

FRAMEWORKS: List[str] = [
    'react', 'angular', 'vue.js', 'next.js', 'node.js', 'express.js',
    'django', 'flask', 'fastapi', 'spring boot', '.net', 'rails',
    'laravel', 'tensorflow', 'pytorch', 'scikit-learn',
]

TOOLS: List[str] = [
    'git', 'docker', 'kubernetes', 'jenkins', 'terraform', 'ansible',
    'jira', 'confluence', 'postman', 'figma', 'tableau', 'power bi',
    'excel', 'jupyter', 'wireshark', 'nmap', 'metasploit', 'burp suite',
    'google analytics',
]

ACHIEVEMENT_VERBS: List[str] = [
    'achieved', 'increased', 'decreased', 'improved', 'reduced', 'saved',
    'generated', 'led', 'managed', 'created', 'developed', 'implemented',
    'award', 'recognition', 'certified', 'published',
]

CERTIFICATION_KEYWORDS: List[str] = [
    'certified', 'certification', 'certificate', 'license', 'credential',
    'aws', 'microsoft', 'google', 'cisco', 'oracle', 'salesforce', 'pmp',
    'scrum master', 'agile', 'itil', 'cissp', 'ceh', 'comptia',
]

# Target roles for skill-gap analysis, keyed by lowercase role name
ROLE_REQUIREMENTS: Dict[str, Dict[str, List[str]]] = {
    'software developer': {
        'required': ['programming', 'debugging', 'version control', 'testing'],
        'preferred': ['agile', 'ci/cd', 'cloud platforms', 'database design'],
    },
    'data scientist': {
        'required': ['python', 'statistics', 'machine learning', 'sql'],
        'preferred': ['deep learning', 'big data', 'data visualization', 'cloud platforms'],
    },
    'product manager': {
        'required': ['strategic thinking', 'user research', 'data analysis', 'communication'],
        'preferred': ['agile', 'design thinking', 'market research', 'roadmap planning'],
    },
}


def role_requirements(role: str) -> Dict[str, List[str]]:
    """Required and preferred skills for a known role; empty lists otherwise."""
    entry = ROLE_REQUIREMENTS.get(role.strip().lower(), {})
    return {
        'required': list(entry.get('required', [])),
        'preferred': list(entry.get('preferred', [])),
    }
